"""
Company Routes

GET /company/dashboard - Own internships with application counts
GET /company/post-internship - Form defaults (capacity options)
POST /company/post-internship - Create internship posting
"""

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.exc import SQLAlchemyError

from gradlinkup.core.auth import get_current_identity
from gradlinkup.services.dashboard_service import get_dashboard_service
from gradlinkup.services.internship_service import get_posting_service
from gradlinkup.services.role_service import store_error_message
from gradlinkup.schemas.schemas import (
    CompanyDashboardResponse, ErrorResponse, Identity, InternshipCreate, InternshipResponse,
    PostInternshipResponse, PostingFormResponse
)

router = APIRouter(prefix="/company", tags=["Companies"], responses={500: {"model": ErrorResponse}})


@router.get("/dashboard", response_model=CompanyDashboardResponse)
async def company_dashboard(identity: Identity = Depends(get_current_identity)):
    """Internships newest first, each with total/pending/accepted counts."""
    service = get_dashboard_service()
    try:
        data = service.company_dashboard(identity.id)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=store_error_message(e))
    return CompanyDashboardResponse(**data)


@router.get("/post-internship", response_model=PostingFormResponse)
async def posting_form(identity: Identity = Depends(get_current_identity)):
    return PostingFormResponse()


@router.post("/post-internship", response_model=PostInternshipResponse, status_code=201)
async def post_internship(data: InternshipCreate, identity: Identity = Depends(get_current_identity)):
    """
    Create a new internship posting, always as "active".

    Stipend is free text: anything that isn't a valid amount is stored as null.
    """
    service = get_posting_service()
    result = service.post(identity, data)

    if not result["success"]:
        raise HTTPException(status_code=500, detail=result["error"])

    return PostInternshipResponse(
        success=True,
        message="Internship posted successfully!",
        redirect_to="/company/dashboard",
        internship=InternshipResponse(**result["internship"])
    )
