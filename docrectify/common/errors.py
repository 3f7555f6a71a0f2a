"""
Error taxonomy for the rectification core.

Propagation policy:
- EngineUnavailable is absorbed into a ``None`` detection result.
- DecodeFailure is fatal for one batch item only.
- GeometryDegenerate makes the rectifier return its input unchanged.
"""


class DocRectifyError(Exception):
    """Base class for all errors raised by docrectify."""


class EngineUnavailable(DocRectifyError):
    """The vision engine did not become ready within the polling window."""


class DecodeFailure(DocRectifyError):
    """Source bytes could not be decoded into an image."""


class GeometryDegenerate(DocRectifyError):
    """A quadrilateral has zero or near-zero area, width or height."""
