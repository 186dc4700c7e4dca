"""
Storage Routes

GET /storage/{bucket}/{key:path} - Download a stored resume (public URL target)
"""

from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import StreamingResponse

from gradlinkup.core.config import get_settings
from gradlinkup.schemas.schemas import ErrorResponse
from gradlinkup.services.storage_service import ResumeStorageService, get_resume_storage

settings = get_settings()

router = APIRouter(prefix="/storage", tags=["Storage"], responses={404: {"model": ErrorResponse}})


@router.get("/{bucket}/{key:path}")
async def download_file(bucket: str, key: str, storage: ResumeStorageService = Depends(get_resume_storage)):
    """Stream a stored file by its storage key."""
    if bucket != settings.resume_bucket:
        raise HTTPException(status_code=404, detail="Bucket not found")

    stored = storage.open(key)
    if stored is None:
        raise HTTPException(status_code=404, detail="File not found")

    return StreamingResponse(
        stored["chunks"],
        media_type=stored["content_type"],
        headers={"Content-Length": str(stored["length"])}
    )
