"""
Scope-guarded ownership of intermediate image buffers.

Each detection run acquires its grayscale, blurred, edge and threshold
buffers through a BufferScope. Leaving the ``with`` block (normally, by an
early return or by an exception) drops every reference the scope holds, so
peak memory during a batch stays bounded by a single image.
"""

import logging
from typing import Dict

import numpy as np

logger = logging.getLogger(__name__)


class BufferScope:
    """
    Context manager owning named intermediate buffers.

    Example:
        >>> with BufferScope("detection") as scope:
        ...     gray = scope.hold("gray", np.zeros((10, 10), np.uint8))
        >>> len(scope)
        0
    """

    def __init__(self, name: str = "scope"):
        self.name = name
        self._buffers: Dict[str, np.ndarray] = {}

    def hold(self, key: str, buffer: np.ndarray) -> np.ndarray:
        """Register ``buffer`` under ``key`` (replacing any previous one) and return it."""
        self._buffers[key] = buffer
        return buffer

    def release(self) -> None:
        """Drop every held buffer."""
        if self._buffers:
            logger.debug(
                f"Releasing {len(self._buffers)} buffers of '{self.name}': "
                f"{sorted(self._buffers)}"
            )
        self._buffers.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._buffers

    def __len__(self) -> int:
        return len(self._buffers)

    def __enter__(self) -> "BufferScope":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False
