"""
Candidate Profile Service

Edit workflow for a candidate's own profile:
1. Load the stored profile, or start from an empty draft on first visit
2. Apply local edits (scalar fields, skill add/remove)
3. Optionally upload a resume (store file, then resolve its public URL)
4. Save - upsert the whole row with role forced to "candidate"

Nothing is persisted until save(); a resume upload only changes the
draft's resume_url.
"""

import logging
import time
from typing import Iterable, List, Optional

from pymongo.errors import PyMongoError
from sqlalchemy.exc import SQLAlchemyError

from gradlinkup.schemas.schemas import Identity, ProfileUpdate, UserRole
from gradlinkup.services.record_service import ProfileRecordService
from gradlinkup.services.role_service import store_error_message
from gradlinkup.services.storage_service import ResumeStorageService
from gradlinkup.utils.file_upload import original_extension
from gradlinkup.utils.tag_set import TagSet

logger = logging.getLogger(__name__)


def resume_key(candidate_id: str, filename: str, timestamp_ms: int) -> str:
    return f"{candidate_id}-resume-{timestamp_ms}.{original_extension(filename)}"


class ProfileDraft:
    """In-memory copy of a profile being edited."""

    FIELDS = ("full_name", "qualifications", "location_preference", "social_category", "resume_url")

    def __init__(
        self,
        profile_id: str,
        role: Optional[str] = None,
        skills: Optional[Iterable[str]] = None,
        exists: bool = False,
        **fields
    ):
        self.id = profile_id
        self.role = role
        self.exists = exists
        self._skills = TagSet(skills)
        self.full_name = None
        self.qualifications = None
        self.location_preference = None
        self.social_category = None
        self.resume_url = None
        for name, value in fields.items():
            self.set_field(name, value)

    @property
    def skills(self) -> List[str]:
        return self._skills.to_list()

    def set_field(self, name: str, value: Optional[str]) -> None:
        if name not in self.FIELDS:
            raise ValueError(f"Unknown profile field: {name}")
        setattr(self, name, value)

    def add_skill(self, skill: str) -> bool:
        return self._skills.add(skill)

    def remove_skill(self, skill: str) -> bool:
        return self._skills.remove(skill)

    def replace_skills(self, skills: Iterable[str]) -> None:
        self._skills = TagSet(skills)

    def to_row(self) -> dict:
        """Full profile row as saved; saving always makes the user a candidate."""
        row = {"id": self.id, "role": UserRole.candidate.value, "skills": self.skills}
        for name in self.FIELDS:
            row[name] = getattr(self, name)
        return row

    def to_dict(self) -> dict:
        data = {"id": self.id, "role": self.role, "skills": self.skills, "exists": self.exists}
        for name in self.FIELDS:
            data[name] = getattr(self, name)
        return data


class ProfileEditService:
    def __init__(self, storage: ResumeStorageService = None):
        self.profiles = ProfileRecordService()
        self.storage = storage

    def load(self, identity: Identity) -> ProfileDraft:
        """Stored profile as a draft; an empty draft when none exists yet."""
        row = self.profiles.get(identity.id)
        if row is None:
            return ProfileDraft(identity.id, full_name=identity.display_name)
        return ProfileDraft(
            row["id"],
            role=row["role"],
            skills=row["skills"],
            exists=True,
            **{name: row.get(name) for name in ProfileDraft.FIELDS}
        )

    def apply_update(self, draft: ProfileDraft, update: ProfileUpdate) -> ProfileDraft:
        """Apply only the fields present in the request; omitted ones keep their value."""
        sent = update.model_fields_set
        for name in ProfileDraft.FIELDS:
            if name in sent:
                draft.set_field(name, getattr(update, name))
        if "skills" in sent:
            draft.replace_skills(update.skills)
        return draft

    def upload_resume(
        self,
        draft: ProfileDraft,
        filename: str,
        content: bytes,
        content_type: str = None,
        timestamp_ms: int = None,
    ) -> dict:
        """
        Upload a resume and point the draft at it.

        The public URL is only resolved after a successful upload, and
        the draft keeps its previous resume_url if either step fails.

        Returns:
            {"success": True/False, "key": "...", "resume_url": "...", "error": None}
        """
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        key = resume_key(draft.id, filename, timestamp_ms)
        result = {"success": False, "key": key, "resume_url": None, "error": None}

        try:
            self.storage.upload(key, content, content_type=content_type, candidate_id=draft.id)
            public_url = self.storage.get_public_url(key)
        except (PyMongoError, OSError) as e:
            result["error"] = str(e)
            logger.warning("Resume upload failed for %s: %s", draft.id, e)
            return result

        draft.resume_url = public_url
        result["resume_url"] = public_url
        result["success"] = True
        return result

    def save(self, draft: ProfileDraft) -> dict:
        """
        Upsert the full profile row.

        Returns:
            {"success": True/False, "error": None}
        """
        result = {"success": False, "error": None}
        try:
            self.profiles.put(draft.to_row())
        except SQLAlchemyError as e:
            result["error"] = store_error_message(e)
            logger.warning("Profile save failed for %s: %s", draft.id, result["error"])
            return result

        draft.role = UserRole.candidate.value
        draft.exists = True
        result["success"] = True
        logger.info("Saved candidate profile %s", draft.id)
        return result


def get_profile_service(storage: ResumeStorageService = None) -> ProfileEditService:
    """Get profile edit service instance."""
    return ProfileEditService(storage=storage)
