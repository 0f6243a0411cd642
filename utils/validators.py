"""Validation utilities for request payloads."""
import re

IMAGE_FILENAME_PATTERN = re.compile(r"\.(jpg|jpeg|png|gif|webp|bmp|heic)$", re.IGNORECASE)


def missing_fields(data, required_fields):
    """Return the required fields that are absent or falsy in data."""
    return [field for field in required_fields if not data.get(field)]


def is_image_filename(filename, allowed_extensions=None):
    """Check the filename ends with an allowed image extension (case-insensitive)."""
    if not filename:
        return False
    if allowed_extensions is None:
        return bool(IMAGE_FILENAME_PATTERN.search(filename))
    _, dot, ext = filename.rpartition(".")
    return bool(dot) and ext.lower() in allowed_extensions
