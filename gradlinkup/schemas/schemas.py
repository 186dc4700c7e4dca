"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    candidate = "candidate"
    company = "company"


class InternshipStatus(str, Enum):
    active = "active"
    closed = "closed"


class ApplicationStatus(str, Enum):
    applied = "Applied"
    under_review = "Under Review"
    accepted = "Accepted"
    rejected = "Rejected"


CAPACITY_OPTIONS = [1, 2, 3, 4, 5, 10, 15, 20]
DEFAULT_CAPACITY = 1


# ============================================================
# IDENTITY / SESSION SCHEMAS
# ============================================================

class Identity(BaseModel):
    """Signed-in user as described by the identity provider token."""
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None

class SessionResponse(BaseModel):
    identity: Identity
    redirect_to: str = "/role-selection"


# ============================================================
# ROLE SELECTION SCHEMAS
# ============================================================

class RoleSelectionRequest(BaseModel):
    role: UserRole

class RoleStatusResponse(BaseModel):
    has_profile: bool
    role: Optional[str] = None
    redirect_to: Optional[str] = None
    roles: List[UserRole] = [UserRole.candidate, UserRole.company]

class RoleSelectionResponse(BaseModel):
    success: bool
    role: UserRole
    redirect_to: str
    message: str


# ============================================================
# CANDIDATE PROFILE SCHEMAS
# ============================================================

class ProfileResponse(BaseModel):
    id: str
    role: Optional[str] = None
    full_name: Optional[str] = None
    qualifications: Optional[str] = None
    skills: List[str] = []
    location_preference: Optional[str] = None
    social_category: Optional[str] = None
    resume_url: Optional[str] = None
    exists: bool = True

class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    qualifications: Optional[str] = None
    skills: List[str] = []
    location_preference: Optional[str] = None
    social_category: Optional[str] = None
    resume_url: Optional[str] = None

class ResumeUploadResponse(BaseModel):
    success: bool
    message: str
    key: str
    resume_url: str


# ============================================================
# DASHBOARD SCHEMAS
# ============================================================

class ApplicationView(BaseModel):
    id: str
    status: str
    badge: str
    applied_at: Optional[datetime] = None
    internship_title: Optional[str] = None
    company_name: Optional[str] = None

class RecommendedInternship(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    stipend: Optional[float] = None
    company_name: Optional[str] = None

class CandidateDashboardResponse(BaseModel):
    applications: List[ApplicationView] = []
    recommendations: List[RecommendedInternship] = []

class ApplicationSummary(BaseModel):
    id: str
    status: str

class ApplicationStats(BaseModel):
    total: int = 0
    pending: int = 0
    accepted: int = 0

class CompanyInternshipView(BaseModel):
    id: str
    title: str
    location: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    applications: List[ApplicationSummary] = []
    stats: ApplicationStats

class CompanyDashboardResponse(BaseModel):
    internships: List[CompanyInternshipView] = []
    active_internships: int = 0
    totals: ApplicationStats


# ============================================================
# INTERNSHIP POSTING SCHEMAS
# ============================================================

class InternshipCreate(BaseModel):
    title: str
    description: str
    location: Optional[str] = None
    stipend: Optional[str] = Field(None, description="Free text, parsed to a number or null")
    capacity: int = DEFAULT_CAPACITY
    required_skills: List[str] = []
    affirmative_action_tags: List[str] = []

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("stipend", mode="before")
    @classmethod
    def stipend_as_text(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("capacity")
    @classmethod
    def capacity_option(cls, v: int) -> int:
        if v not in CAPACITY_OPTIONS:
            raise ValueError(f"capacity must be one of {CAPACITY_OPTIONS}")
        return v

class InternshipResponse(BaseModel):
    id: str
    company_id: str
    title: str
    description: str
    location: Optional[str] = None
    stipend: Optional[float] = None
    capacity: int
    required_skills: List[str] = []
    affirmative_action_tags: List[str] = []
    status: str
    created_at: Optional[datetime] = None

class PostInternshipResponse(BaseModel):
    success: bool
    message: str
    redirect_to: str
    internship: InternshipResponse

class PostingFormResponse(BaseModel):
    capacity_options: List[int] = CAPACITY_OPTIONS
    default_capacity: int = DEFAULT_CAPACITY


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class ErrorResponse(BaseModel):
    detail: str
