"""
Role Selection Service

First-run provisioning for a signed-in identity:
1. Upsert the profile row with the chosen role
2. For companies, upsert the company row as well
3. Hand back the dashboard the user should land on

A user who already has a profile skips the chooser entirely.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from gradlinkup.schemas.schemas import Identity, UserRole
from gradlinkup.services.record_service import CompanyRecordService, ProfileRecordService

logger = logging.getLogger(__name__)

ROLE_HOME = {
    UserRole.candidate.value: "/candidate/dashboard",
    UserRole.company.value: "/company/dashboard",
}
DEFAULT_COMPANY_NAME = "Your Company"


def dashboard_for(role: Optional[str]) -> Optional[str]:
    return ROLE_HOME.get(role) if role else None


def store_error_message(exc: Exception) -> str:
    """Driver-level message of a store error, without SQLAlchemy's wrapping."""
    return str(getattr(exc, "orig", None) or exc)


class RoleSelectionService:
    def __init__(self):
        self.profiles = ProfileRecordService()
        self.companies = CompanyRecordService()

    def check_existing(self, identity: Identity) -> dict:
        role = self.profiles.get_role(identity.id)
        return {
            "has_profile": role is not None,
            "role": role,
            "redirect_to": dashboard_for(role),
        }

    def select_role(self, identity: Identity, role: UserRole) -> dict:
        """
        Provision profile (and company) rows for the chosen role.

        Returns:
            {
                "success": True/False,
                "role": "candidate" | "company",
                "redirect_to": "/candidate/dashboard" or None on failure,
                "error": message or None
            }
        """
        role = UserRole(role)
        result = {"success": False, "role": role.value, "redirect_to": None, "error": None}

        try:
            self.profiles.put({
                "id": identity.id,
                "full_name": identity.display_name or identity.email,
                "role": role.value,
            })

            if role == UserRole.company:
                self.companies.put({
                    "id": identity.id,
                    "company_name": identity.display_name or DEFAULT_COMPANY_NAME,
                })

            result["redirect_to"] = ROLE_HOME[role.value]
            result["success"] = True
            logger.info("Provisioned %s profile for %s", role.value, identity.id)

        except SQLAlchemyError as e:
            result["error"] = store_error_message(e)
            logger.warning("Role selection failed for %s: %s", identity.id, result["error"])

        return result


def get_role_selection_service() -> RoleSelectionService:
    """Get role selection service instance."""
    return RoleSelectionService()
