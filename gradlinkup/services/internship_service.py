"""
Internship Posting Service

Company-side creation of an internship:
- stipend arrives as free text and is parsed to a number (or null)
- skills and affirmative action tags are trimmed, de-duplicated, blanks dropped
- status is always "active" and company_id is always the poster's id
- the row is inserted, never upserted
"""

import logging
import math
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from gradlinkup.schemas.schemas import Identity, InternshipCreate, InternshipStatus
from gradlinkup.services.record_service import InternshipRecordService
from gradlinkup.services.role_service import store_error_message
from gradlinkup.utils.tag_set import TagSet

logger = logging.getLogger(__name__)


def parse_stipend(raw: Optional[str]) -> Optional[float]:
    """'15000' -> 15000.0; empty, invalid, negative or non-finite -> None."""
    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


class InternshipPostingService:
    def __init__(self):
        self.internships = InternshipRecordService()

    def build_row(self, identity: Identity, data: InternshipCreate) -> dict:
        return {
            "company_id": identity.id,
            "title": data.title,
            "description": data.description,
            "location": data.location,
            "stipend": parse_stipend(data.stipend),
            "capacity": data.capacity,
            "required_skills": TagSet(data.required_skills).to_list(),
            "affirmative_action_tags": TagSet(data.affirmative_action_tags).to_list(),
            "status": InternshipStatus.active.value,
        }

    def post(self, identity: Identity, data: InternshipCreate) -> dict:
        """
        Insert a new posting for the signed-in company.

        Returns:
            {"success": True/False, "internship": {...} or None, "error": None}
        """
        result = {"success": False, "internship": None, "error": None}
        try:
            result["internship"] = self.internships.insert(self.build_row(identity, data))
            result["success"] = True
        except SQLAlchemyError as e:
            result["error"] = store_error_message(e)
            logger.warning("Internship post failed for %s: %s", identity.id, result["error"])
        return result


def get_posting_service() -> InternshipPostingService:
    """Get internship posting service instance."""
    return InternshipPostingService()
