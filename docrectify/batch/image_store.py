"""
Image store seam and codecs.

The rectification core works on in-memory RasterImages; items refer to
their images by URL. The store resolves URLs to encoded bytes and keeps
newly produced pages. ``InMemoryImageStore`` is the reference
implementation; the host application may provide its own.
"""

import io
import logging
import uuid
from typing import Dict, Optional, Protocol

import cv2
import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from docrectify.common.errors import DecodeFailure
from docrectify.common.types import RasterImage

logger = logging.getLogger(__name__)


class ImageStore(Protocol):
    """Resolves item URLs to encoded image bytes."""

    def load(self, url: str) -> bytes:
        ...

    def save(self, image: RasterImage) -> str:
        ...


def decode_image(data: bytes) -> RasterImage:
    """
    Decode encoded image bytes to a native-resolution BGR(A) RasterImage.

    EXIF orientation is applied so the pixels match what the user sees.

    Raises:
        DecodeFailure: If the bytes are not a valid image.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img = ImageOps.exif_transpose(img)
            if img.mode in ("RGBA", "LA", "P"):
                rgba = np.array(img.convert("RGBA"))
                array = cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA)
            elif img.mode == "L":
                array = np.array(img)
            else:
                array = cv2.cvtColor(np.array(img.convert("RGB")), cv2.COLOR_RGB2BGR)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeFailure(f"Cannot decode image ({len(data)} bytes): {e}") from e

    logger.debug(f"Decoded image: {array.shape[1]}x{array.shape[0]}")
    return RasterImage(data=array)


def encode_image(image: RasterImage) -> bytes:
    """
    Encode an image losslessly as PNG.

    Raises:
        ValueError: If OpenCV cannot encode the image.
    """
    ok, buffer = cv2.imencode(".png", image.data)
    if not ok:
        raise ValueError(f"PNG encoding failed for {image!r}")
    return buffer.tobytes()


class InMemoryImageStore:
    """
    Dictionary-backed image store using ``mem://`` URLs.

    Example:
        >>> store = InMemoryImageStore()
        >>> url = store.put(open("page.jpg", "rb").read())
        >>> image = decode_image(store.load(url))
    """

    SCHEME = "mem://"

    def __init__(self):
        self._blobs: Dict[str, bytes] = {}

    def _new_url(self) -> str:
        return f"{self.SCHEME}{uuid.uuid4().hex}"

    def put(self, data: bytes, url: Optional[str] = None) -> str:
        """Store raw encoded bytes (e.g. an uploaded file) and return the URL."""
        url = url or self._new_url()
        self._blobs[url] = data
        return url

    def load(self, url: str) -> bytes:
        """
        Raises:
            KeyError: If nothing is stored under ``url``.
        """
        try:
            return self._blobs[url]
        except KeyError:
            raise KeyError(f"No image stored at {url}") from None

    def save(self, image: RasterImage) -> str:
        return self.put(encode_image(image))

    def __contains__(self, url: str) -> bool:
        return url in self._blobs

    def __len__(self) -> int:
        return len(self._blobs)
