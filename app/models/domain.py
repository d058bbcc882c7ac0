"""
Domain models - the entities the catalog stores.

All models are frozen: services never edit one in place, they build the next
version with `model_copy(update=...)` and hand it back to the catalog.
Field names are snake_case in Python and camelCase on the wire.
"""

import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    placement_cell = "placementCell"
    faculty_mentor = "facultyMentor"
    employer = "employer"


class ApplicationStatus(str, Enum):
    applied = "applied"
    approved = "approved"
    rejected = "rejected"
    interview_scheduled = "interviewScheduled"
    offer_extended = "offerExtended"
    completed = "completed"


class MentorApprovalStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class MentorDecision(str, Enum):
    approve = "approve"
    reject = "reject"


TERMINAL_STATUSES = frozenset({ApplicationStatus.completed, ApplicationStatus.rejected})


class DomainModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================
# USERS
# ============================================================

class Preferences(DomainModel):
    location: str = ""
    min_stipend: int = Field(0, ge=0)
    max_stipend: int = Field(0, ge=0)
    placement_conversion: bool = False


class User(DomainModel):
    id: str
    name: str
    email: EmailStr
    role: UserRole
    department: Optional[str] = None
    skills: List[str] = []
    preferences: Optional[Preferences] = None

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.student


# ============================================================
# OPPORTUNITIES
# ============================================================

class Opportunity(DomainModel):
    id: str
    title: str
    company: str
    description: str = ""
    required_skills: List[str] = []
    department: str = ""
    stipend: int = Field(0, ge=0)
    duration: str = ""
    location: str = ""
    placement_conversion: bool = False
    application_deadline: datetime.date
    posted_by: str
    created_at: datetime.date


# ============================================================
# APPLICATIONS
# ============================================================

class MentorApproval(DomainModel):
    status: MentorApprovalStatus = MentorApprovalStatus.pending
    comments: str = ""
    date: Optional[datetime.date] = None


class Feedback(DomainModel):
    rating: int = Field(..., ge=1, le=5)
    comments: str = ""
    date: datetime.date


class Application(DomainModel):
    id: str
    student_id: str
    opportunity_id: str
    status: ApplicationStatus = ApplicationStatus.applied
    applied_date: datetime.date
    mentor_approval: Optional[MentorApproval] = None
    interview_date: Optional[datetime.date] = None
    feedback: Optional[Feedback] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def mentor_status(self) -> MentorApprovalStatus:
        """Applications created without a sub-record count as pending."""
        if self.mentor_approval is None:
            return MentorApprovalStatus.pending
        return self.mentor_approval.status
