"""
Schemas module - Request/Response schemas for API endpoints.
"""

from gradlinkup.schemas.schemas import (
    ApplicationStatus,
    Identity,
    InternshipStatus,
    UserRole,
)

__all__ = ["ApplicationStatus", "Identity", "InternshipStatus", "UserRole"]
