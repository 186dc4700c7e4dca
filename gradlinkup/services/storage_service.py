"""
Resume Storage Service - object store for uploaded resume files.

Files live in a MongoDB GridFS bucket, one file per storage key.
Public URLs point back at this API's download route, which
streams the file out of GridFS.

Two separate calls, mirroring a hosted object store:
    storage.upload(key, data, content_type)
    storage.get_public_url(key)
"""

import logging
from typing import Iterator, Optional
from urllib.parse import quote

from gridfs import GridFSBucket
from gridfs.errors import NoFile

from gradlinkup.core.config import get_settings
from gradlinkup.db.mongodb import get_resume_bucket

settings = get_settings()
logger = logging.getLogger(__name__)


class ResumeStorageService:
    """GridFS-backed resume store."""

    def __init__(self, bucket: GridFSBucket = None):
        self.bucket = bucket or get_resume_bucket()

    def upload(self, key: str, data: bytes, content_type: str = None, candidate_id: str = None) -> str:
        """
        Store a file under `key`.

        Returns:
            GridFS file id as string
        """
        file_id = self.bucket.upload_from_stream(
            key,
            data,
            metadata={"content_type": content_type, "candidate_id": candidate_id},
        )
        logger.info("Stored resume %s (%d bytes)", key, len(data))
        return str(file_id)

    def get_public_url(self, key: str) -> str:
        base = settings.public_base_url.rstrip("/")
        return f"{base}/api/storage/{settings.resume_bucket}/{quote(key, safe='')}"

    def open(self, key: str) -> Optional[dict]:
        """
        Latest revision of the file stored under `key`.

        Returns:
            {"content_type": ..., "length": ..., "chunks": iterator} or None
        """
        try:
            stream = self.bucket.open_download_stream_by_name(key)
        except NoFile:
            return None
        metadata = stream.metadata or {}
        return {
            "content_type": metadata.get("content_type") or "application/octet-stream",
            "length": stream.length,
            "chunks": _iter_chunks(stream),
        }


def _iter_chunks(stream, chunk_size: int = 256 * 1024) -> Iterator[bytes]:
    try:
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            yield chunk
    finally:
        stream.close()


def get_resume_storage() -> ResumeStorageService:
    """Get resume storage service instance."""
    return ResumeStorageService()
