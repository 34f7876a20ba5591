"""
Blob Store - resume files on local disk.

Files are written under `upload_dir` using their storage key as a relative
path (e.g. resumes/<job_id>/1700000000000-cv.pdf) and served back through
GET /files/{key}, which is the public download URL handed to applicants'
records.
"""

import logging
import os
import re
from pathlib import Path
from urllib.parse import quote

from app.core.errors import BackendError, NotFoundError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str) -> str:
    """Strip directories and unsafe characters from an uploaded filename."""
    name = os.path.basename((filename or "").replace("\\", "/"))
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "resume"


class LocalBlobStore:
    """upload-bytes-to-path and get-public-download-url over a directory."""

    def __init__(self, root: str, public_base_url: str):
        self.root = Path(root).resolve()
        self.public_base_url = public_base_url.rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        """Resolve a key to a file path, refusing keys that escape the root."""
        path = (self.root / key).resolve()
        if path != self.root and self.root not in path.parents:
            raise NotFoundError("File not found")
        return path

    def upload(self, key: str, data: bytes, content_type: str = None) -> str:
        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to store blob {key}: {e}")
            raise BackendError("Failed to upload resume") from e
        logger.info(f"Stored blob {key} ({len(data)} bytes, {content_type})")
        return key

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/api/files/{quote(key)}"
