"""
Unit tests for the image codecs and the in-memory store.
"""

import io

import cv2
import numpy as np
import pytest
from PIL import Image

from docrectify.batch.image_store import InMemoryImageStore, decode_image, encode_image
from docrectify.common.errors import DecodeFailure
from docrectify.common.types import RasterImage


def _png_bytes(array: np.ndarray) -> bytes:
    ok, buffer = cv2.imencode(".png", array)
    assert ok
    return buffer.tobytes()


class TestDecodeImage:
    """Test decoding to BGR(A) RasterImages."""

    def test_decodes_bgr_channel_order(self):
        data = np.zeros((10, 20, 3), dtype=np.uint8)
        data[:, :] = (255, 0, 0)  # pure blue in BGR

        image = decode_image(_png_bytes(data))

        assert image.shape == (10, 20, 3)
        np.testing.assert_array_equal(image.data[0, 0], [255, 0, 0])

    def test_keeps_alpha(self):
        data = np.zeros((8, 8, 4), dtype=np.uint8)
        data[:, :, 3] = 90

        image = decode_image(_png_bytes(data))

        assert image.channels == 4
        assert (image.data[:, :, 3] == 90).all()

    def test_grayscale_stays_single_channel(self):
        image = decode_image(_png_bytes(np.full((5, 7), 33, dtype=np.uint8)))

        assert image.shape == (5, 7)
        assert (image.data == 33).all()

    def test_applies_exif_orientation(self):
        buffer = io.BytesIO()
        exif = Image.Exif()
        exif[0x0112] = 6  # rotate 90 CW on display
        Image.new("RGB", (40, 20), "white").save(buffer, "JPEG", exif=exif.tobytes())

        image = decode_image(buffer.getvalue())

        assert (image.width, image.height) == (20, 40)

    @pytest.mark.parametrize("data", [b"", b"not an image", b"\x89PNG\r\n\x1a\n" + b"\x00" * 8])
    def test_invalid_bytes(self, data):
        with pytest.raises(DecodeFailure, match="Cannot decode image"):
            decode_image(data)


class TestEncodeImage:
    def test_png_is_lossless(self, gradient_image):
        decoded = decode_image(encode_image(gradient_image))
        np.testing.assert_array_equal(decoded.data, gradient_image.data)


class TestInMemoryImageStore:
    """Test the dictionary-backed store."""

    def test_put_and_load(self):
        store = InMemoryImageStore()
        url = store.put(b"abc")

        assert url.startswith(InMemoryImageStore.SCHEME)
        assert url in store
        assert store.load(url) == b"abc"

    def test_put_with_explicit_url(self):
        store = InMemoryImageStore()
        assert store.put(b"abc", url="mem://page-1") == "mem://page-1"
        assert store.load("mem://page-1") == b"abc"

    def test_save_creates_new_url(self):
        store = InMemoryImageStore()
        image = RasterImage(data=np.zeros((4, 4), dtype=np.uint8))

        first, second = store.save(image), store.save(image)

        assert first != second
        assert len(store) == 2

    def test_missing_url(self):
        with pytest.raises(KeyError, match="No image stored"):
            InMemoryImageStore().load("mem://missing")
