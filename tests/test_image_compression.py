"""Test client-side photo compression."""
import cv2
import numpy as np
import pytest

from client.image_compression import ImageCompressionError, compress_image


def encode(img, ext=".png"):
    ok, buf = cv2.imencode(ext, img)
    assert ok
    return buf.tobytes()


def test_large_noisy_photo_is_shrunk_within_limits():
    rng = np.random.default_rng(0)
    img = rng.integers(0, 256, size=(1500, 2000, 3), dtype=np.uint8)
    data = encode(img)
    assert len(data) > 512 * 1024

    result = compress_image("selfie.png", data)

    assert result.filename == "selfie.jpg"
    assert result.content_type == "image/jpeg"
    assert result.size <= 512 * 1024
    decoded = cv2.imdecode(np.frombuffer(result.data, dtype=np.uint8), cv2.IMREAD_COLOR)
    assert max(decoded.shape[:2]) <= 1280


def test_tall_image_is_limited_on_longest_side():
    img = np.full((3000, 1000, 3), 200, dtype=np.uint8)
    result = compress_image("tall.jpg", encode(img, ".jpg"))

    decoded = cv2.imdecode(np.frombuffer(result.data, dtype=np.uint8), cv2.IMREAD_COLOR)
    height, width = decoded.shape[:2]
    assert height == 1280
    assert width == pytest.approx(427, abs=1)


def test_small_photo_is_returned_untouched():
    img = np.zeros((100, 120, 3), dtype=np.uint8)
    data = encode(img)

    result = compress_image("small.png", data)

    assert result.data == data
    assert result.filename == "small.png"
    assert result.content_type == "image/png"


def test_undecodable_bytes_raise():
    with pytest.raises(ImageCompressionError):
        compress_image("broken.jpg", b"not an image")
