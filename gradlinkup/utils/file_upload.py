"""
File Upload Utility - Validate resume uploads before storage.

Supported formats:
- PDF (.pdf)
- Word (.doc, .docx)

Max file size: settings.max_resume_size_mb (5MB by default)
"""

from typing import Tuple
from fastapi import UploadFile, HTTPException

from gradlinkup.core.config import get_settings

settings = get_settings()

ALLOWED_EXTENSIONS = {'.pdf', '.doc', '.docx'}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension, including the dot."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


def original_extension(filename: str) -> str:
    """Extension as typed by the user, without the dot."""
    return filename.rsplit('.', 1)[-1]


async def read_resume_upload(file: UploadFile) -> Tuple[bytes, str]:
    """
    Read and validate an uploaded resume.

    Args:
        file: FastAPI UploadFile

    Returns:
        Tuple of (content, filename)

    Raises:
        HTTPException on validation errors
    """
    # Validate filename
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    ext = get_file_extension(file.filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: PDF, DOC, DOCX"
        )

    # Read content
    content = await file.read()

    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    # Check size
    if len(content) > settings.max_resume_size_mb * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {settings.max_resume_size_mb}MB"
        )

    return content, file.filename
