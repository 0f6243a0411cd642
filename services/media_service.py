# services/media_service.py
"""Image intake: validate the filename and pass the bytes to blob storage."""
import logging

from flask import current_app

from services.blob_storage import get_blob_storage
from utils.errors import StorageError, ValidationError
from utils.validators import is_image_filename

logger = logging.getLogger(__name__)

PEEK_SIZE = 64 * 1024


class PrefixedStream:
    """Replays an already-read first chunk ahead of the rest of a stream."""

    def __init__(self, head, stream):
        self.head = head
        self.stream = stream

    def read(self, size=-1):
        if not self.head:
            return self.stream.read(size)
        if size is None or size < 0:
            data, self.head = self.head + self.stream.read(), b""
            return data
        data, self.head = self.head[:size], self.head[size:]
        return data


def upload_image(filename, stream, content_length):
    """
    Store an uploaded image and return its blob metadata.
    The bytes are passed through untouched; no retry on failure.

    content_length is None for chunked bodies; those are accepted as long
    as at least one byte arrives.
    """
    if not filename or content_length == 0:
        raise ValidationError("Filename and body are required")

    allowed = current_app.config.get("ALLOWED_IMAGE_EXTENSIONS")
    if not is_image_filename(filename, allowed):
        raise ValidationError("Only image files are allowed")

    if content_length is None:
        head = stream.read(PEEK_SIZE)
        if not head:
            raise ValidationError("Filename and body are required")
        stream = PrefixedStream(head, stream)

    storage = get_blob_storage()
    try:
        blob = storage.put(filename, stream)
    except StorageError:
        logger.exception("Upload error for %s", filename)
        raise StorageError("Upload failed")

    logger.info("Uploaded %s (%s bytes) to %s", filename, content_length or "chunked", blob.get("url"))
    return blob
