"""
Authentication Utility - identity provider token verification.

Provides:
- JWT verification with the provider's shared secret
- FastAPI dependency resolving the signed-in Identity

Tokens are issued by the external identity provider; this service
never creates credentials.
"""

from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from gradlinkup.core.config import get_settings
from gradlinkup.schemas.schemas import Identity

settings = get_settings()

# Bearer token extractor (auto_error off so a missing header is a 401, not a 403)
bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
    except JWTError:
        return None


def identity_from_claims(payload: dict) -> Optional[Identity]:
    user_id = payload.get("sub")
    if not user_id:
        return None
    metadata = payload.get("user_metadata") or {}
    return Identity(
        id=str(user_id),
        email=payload.get("email"),
        display_name=metadata.get("full_name") or metadata.get("name"),
    )


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    """
    FastAPI dependency - Get the signed-in identity.

    Usage:
        @router.get("/protected")
        async def route(identity: Identity = Depends(get_current_identity)):
            return identity
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if not payload:
        raise credentials_exception

    identity = identity_from_claims(payload)
    if identity is None:
        raise credentials_exception

    return identity
