"""
Authentication Routes

Sign-in itself happens at the identity provider (OAuth).

GET /auth/session - Current identity and where to go next
"""

from fastapi import APIRouter, Depends

from gradlinkup.core.auth import get_current_identity
from gradlinkup.schemas.schemas import Identity, SessionResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/session", response_model=SessionResponse)
async def get_session(identity: Identity = Depends(get_current_identity)):
    """
    Resolve the signed-in identity from the provider token.

    A signed-in user always continues to role selection, which
    forwards existing users straight to their dashboard.
    """
    return SessionResponse(identity=identity, redirect_to="/role-selection")
