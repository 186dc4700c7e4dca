"""
Role Selection Routes

GET /role-selection - Check for an existing profile (redirect if found)
POST /role-selection - Provision profile (and company) for the chosen role
"""

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.exc import SQLAlchemyError

from gradlinkup.core.auth import get_current_identity
from gradlinkup.services.role_service import get_role_selection_service, store_error_message
from gradlinkup.schemas.schemas import (
    ErrorResponse, Identity, RoleSelectionRequest, RoleSelectionResponse, RoleStatusResponse
)

router = APIRouter(prefix="/role-selection", tags=["Role Selection"], responses={500: {"model": ErrorResponse}})


@router.get("", response_model=RoleStatusResponse)
async def check_role(identity: Identity = Depends(get_current_identity)):
    """Users who already picked a role skip the chooser."""
    service = get_role_selection_service()
    try:
        status = service.check_existing(identity)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=store_error_message(e))
    return RoleStatusResponse(**status)


@router.post("", response_model=RoleSelectionResponse)
async def select_role(request: RoleSelectionRequest, identity: Identity = Depends(get_current_identity)):
    """
    Create the profile for the chosen role.

    Company accounts also get a company record named after the
    user (or "Your Company").
    """
    service = get_role_selection_service()
    result = service.select_role(identity, request.role)

    if not result["success"]:
        raise HTTPException(status_code=500, detail=result["error"])

    return RoleSelectionResponse(
        success=True,
        role=result["role"],
        redirect_to=result["redirect_to"],
        message=f"Welcome to GradLinkUp as a {result['role']}!"
    )
