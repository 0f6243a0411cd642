# services/blob_storage.py
"""
Blob storage backends for uploaded photos.

Each backend takes a filename and a byte stream, stores it with public-read
access and returns the blob metadata (url, downloadUrl, pathname,
contentType, contentDisposition).
"""
import logging
import mimetypes
import os
import shutil
import uuid
from urllib.parse import quote

import requests
from flask import current_app, url_for
from werkzeug.utils import secure_filename

from config import runtime_setting
from utils.errors import StorageError

logger = logging.getLogger(__name__)

mimetypes.add_type("image/heic", ".heic")
mimetypes.add_type("image/webp", ".webp")


def guess_content_type(filename):
    return mimetypes.guess_type(filename)[0] or "application/octet-stream"


def suffixed_pathname(filename):
    """photo.jpg -> photo-1a2b3c4d.jpg, so two uploads never share a name."""
    safe = secure_filename(filename) or "upload"
    stem, ext = os.path.splitext(safe)
    return f"{stem}-{uuid.uuid4().hex[:8]}{ext}"


class BlobStorage:
    """Interface for blob backends."""

    def put(self, filename, stream):
        raise NotImplementedError


class VercelBlobStorage(BlobStorage):
    """Uploads through the Vercel Blob HTTP API with a read-write token."""

    API_VERSION = "7"

    def __init__(self, token, api_url, timeout):
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    def put(self, filename, stream):
        if not self.token:
            raise StorageError("Blob storage token is not configured")

        content_type = guess_content_type(filename)
        try:
            response = requests.put(
                f"{self.api_url}/{quote(filename)}",
                data=stream,
                headers={
                    "authorization": f"Bearer {self.token}",
                    "x-api-version": self.API_VERSION,
                    "x-content-type": content_type,
                    "x-add-random-suffix": "1",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            blob = response.json()
        except (requests.RequestException, ValueError) as e:
            raise StorageError(f"Upload failed: {e}") from e

        if not blob.get("url"):
            raise StorageError("Upload failed: blob API returned no url")
        return blob


class LocalBlobStorage(BlobStorage):
    """Writes uploads under UPLOAD_FOLDER; served back by GET /uploads/<name>."""

    def __init__(self, folder):
        self.folder = folder

    def put(self, filename, stream):
        pathname = suffixed_pathname(filename)
        target = os.path.join(self.folder, pathname)
        try:
            os.makedirs(self.folder, exist_ok=True)
            with open(target, "wb") as f:
                shutil.copyfileobj(stream, f)
        except OSError as e:
            self._discard(target)
            raise StorageError(f"Upload failed: {e}") from e
        except Exception:
            # e.g. the client disconnected mid-body
            self._discard(target)
            raise

        url = url_for("media.serve_upload", filename=pathname, _external=True)
        return {
            "url": url,
            "downloadUrl": f"{url}?download=1",
            "pathname": pathname,
            "contentType": guess_content_type(pathname),
            "contentDisposition": f'inline; filename="{pathname}"',
        }

    @staticmethod
    def _discard(target):
        """Drop a partially written file."""
        try:
            os.remove(target)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not remove partial upload %s", target)


def get_blob_storage():
    """Build the configured backend; the token is read at request time."""
    backend = current_app.config.get("BLOB_BACKEND", "vercel")
    if backend == "local":
        return LocalBlobStorage(current_app.config["UPLOAD_FOLDER"])
    if backend == "vercel":
        return VercelBlobStorage(
            token=runtime_setting("BLOB_READ_WRITE_TOKEN"),
            api_url=current_app.config["BLOB_API_URL"],
            timeout=current_app.config.get("BLOB_TIMEOUT", 30),
        )
    raise StorageError(f"Unknown blob backend: {backend}")
