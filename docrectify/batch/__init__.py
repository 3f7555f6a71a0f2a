"""
Batch processing of document groups: auto-crop, single-level undo and the
image store seam.
"""

from docrectify.batch.image_store import (
    ImageStore,
    InMemoryImageStore,
    decode_image,
    encode_image,
)
from docrectify.batch.messages import translate
from docrectify.batch.processor import BatchSession, auto_crop_image
from docrectify.batch.types import (
    BatchFailure,
    BatchReport,
    DocumentGroup,
    ImageItem,
    ItemKind,
)

__all__ = [
    "BatchSession",
    "auto_crop_image",
    "ImageStore",
    "InMemoryImageStore",
    "decode_image",
    "encode_image",
    "translate",
    "BatchFailure",
    "BatchReport",
    "DocumentGroup",
    "ImageItem",
    "ItemKind",
]
