"""
Candidate Routes

GET /candidate/dashboard - My applications + recommended internships
GET /candidate/profile - Load profile (empty draft on first visit)
PUT /candidate/profile - Save profile
POST /candidate/profile/resume - Upload resume, returns its public URL
"""

from fastapi import APIRouter, HTTPException, Depends, UploadFile, File
from sqlalchemy.exc import SQLAlchemyError

from gradlinkup.core.auth import get_current_identity
from gradlinkup.services.dashboard_service import get_dashboard_service
from gradlinkup.services.profile_service import get_profile_service
from gradlinkup.services.role_service import store_error_message
from gradlinkup.services.storage_service import ResumeStorageService, get_resume_storage
from gradlinkup.utils.file_upload import read_resume_upload
from gradlinkup.schemas.schemas import (
    CandidateDashboardResponse, ErrorResponse, Identity, ProfileResponse, ProfileUpdate, ResumeUploadResponse
)

router = APIRouter(prefix="/candidate", tags=["Candidates"], responses={500: {"model": ErrorResponse}})


@router.get("/dashboard", response_model=CandidateDashboardResponse)
async def candidate_dashboard(identity: Identity = Depends(get_current_identity)):
    """Applications (newest first) and up to 5 active internships."""
    service = get_dashboard_service()
    try:
        data = service.candidate_dashboard(identity.id)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=store_error_message(e))
    return CandidateDashboardResponse(**data)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(identity: Identity = Depends(get_current_identity)):
    """Stored profile, or an unsaved default when none exists yet."""
    service = get_profile_service()
    try:
        draft = service.load(identity)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=store_error_message(e))
    return ProfileResponse(**draft.to_dict())


@router.put("/profile", response_model=ProfileResponse)
async def save_profile(data: ProfileUpdate, identity: Identity = Depends(get_current_identity)):
    """
    Save the profile. Omitted fields keep their stored value, skills
    are trimmed and de-duplicated, and the saved role is always "candidate".
    """
    service = get_profile_service()
    try:
        draft = service.load(identity)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=store_error_message(e))

    service.apply_update(draft, data)
    result = service.save(draft)

    if not result["success"]:
        raise HTTPException(status_code=500, detail=result["error"])

    return ProfileResponse(**draft.to_dict())


@router.post("/profile/resume", response_model=ResumeUploadResponse)
async def upload_resume(
    file: UploadFile = File(..., description="Resume file (PDF, DOC or DOCX)"),
    identity: Identity = Depends(get_current_identity),
    storage: ResumeStorageService = Depends(get_resume_storage),
):
    """
    Upload a resume to file storage.

    The returned resume_url is not saved to the profile until the
    next PUT /candidate/profile.
    """
    content, filename = await read_resume_upload(file)

    service = get_profile_service(storage=storage)
    try:
        draft = service.load(identity)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=store_error_message(e))

    result = service.upload_resume(draft, filename, content, content_type=file.content_type)

    if not result["success"]:
        raise HTTPException(status_code=500, detail=result["error"])

    return ResumeUploadResponse(
        success=True,
        message="Resume uploaded successfully!",
        key=result["key"],
        resume_url=result["resume_url"]
    )
