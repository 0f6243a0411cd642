"""
client/image_compression.py
---------------------------------
Shrinks a photo before upload: longest side at most 1280px and
an encoded size of at most 0.5MB, re-encoded as JPEG when needed.
"""

import os

import cv2
import numpy as np

MAX_SIZE_MB = 0.5
MAX_WIDTH_OR_HEIGHT = 1280

JPEG_QUALITY_STEPS = (90, 80, 70, 60, 50, 40, 30)
DOWNSCALE_FACTOR = 0.8
MIN_SIDE = 64


class ImageCompressionError(Exception):
    pass


class CompressedImage:
    def __init__(self, filename, data, content_type):
        self.filename = filename
        self.data = data
        self.content_type = content_type

    @property
    def size(self):
        return len(self.data)


def _resize_to_fit(img, max_side):
    h, w = img.shape[:2]
    longest = max(h, w)
    if longest <= max_side:
        return img
    scale = max_side / float(longest)
    new_size = (max(1, int(round(w * scale))), max(1, int(round(h * scale))))
    return cv2.resize(img, new_size, interpolation=cv2.INTER_AREA)


def _encode_jpeg(img, quality):
    ok, buf = cv2.imencode(".jpg", img, [int(cv2.IMWRITE_JPEG_QUALITY), quality])
    if not ok:
        raise ImageCompressionError("Failed to encode image")
    return buf.tobytes()


def compress_image(filename, data, max_size_mb=MAX_SIZE_MB, max_width_or_height=MAX_WIDTH_OR_HEIGHT):
    """
    Return a CompressedImage within the size and dimension limits.
    An image already inside both limits is returned untouched.
    """
    max_bytes = int(max_size_mb * 1024 * 1024)

    img = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
    if img is None:
        raise ImageCompressionError(f"Could not decode image: {filename}")

    h, w = img.shape[:2]
    if max(h, w) <= max_width_or_height and len(data) <= max_bytes:
        ext = os.path.splitext(filename)[1].lower().lstrip(".")
        content_type = "image/jpeg" if ext in ("jpg", "jpeg") else f"image/{ext or 'octet-stream'}"
        return CompressedImage(filename, data, content_type)

    img = _resize_to_fit(img, max_width_or_height)
    jpeg_name = os.path.splitext(filename)[0] + ".jpg"

    while True:
        for quality in JPEG_QUALITY_STEPS:
            encoded = _encode_jpeg(img, quality)
            if len(encoded) <= max_bytes:
                return CompressedImage(jpeg_name, encoded, "image/jpeg")

        h, w = img.shape[:2]
        if max(h, w) * DOWNSCALE_FACTOR < MIN_SIDE:
            raise ImageCompressionError(f"Cannot compress {filename} below {max_size_mb}MB")
        img = _resize_to_fit(img, int(max(h, w) * DOWNSCALE_FACTOR))
