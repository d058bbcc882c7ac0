"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Entities themselves (User, Opportunity, Application) are returned as-is
from app.models; the schemas here wrap or extend them.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import date

from app.models.domain import (
    Application,
    MentorDecision,
    Opportunity,
    User,
    UserRole,
)


class APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class SkillAdd(APIModel):
    skill: str = Field(..., min_length=1, max_length=100)


# ============================================================
# OPPORTUNITY SCHEMAS
# ============================================================

class OpportunityCreate(APIModel):
    title: str = Field(..., min_length=1, max_length=200)
    company: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    required_skills: List[str] = []
    department: str = ""
    stipend: int = Field(0, ge=0)
    duration: str = ""
    location: str = ""
    placement_conversion: bool = False
    application_deadline: date


class PostedOpportunity(APIModel):
    opportunity: Opportunity
    application_count: int


# ============================================================
# RECOMMENDATION SCHEMAS
# ============================================================

class RecommendationResponse(APIModel):
    opportunity: Opportunity
    matched_skills: List[str]
    missing_skills: List[str]
    match_fraction: float
    reason: str


class RecommendationListResponse(APIModel):
    recommendations: List[RecommendationResponse]
    total: int


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class MentorDecisionRequest(APIModel):
    decision: MentorDecision
    comments: str = ""


class InterviewScheduleRequest(APIModel):
    interview_date: Optional[date] = None


class FeedbackRequest(APIModel):
    # Strict: true, "4" and 4.0 are refused. Range is checked by the lifecycle service
    rating: StrictInt
    comments: str = ""


class ApplicationDetail(APIModel):
    application: Application
    opportunity_title: Optional[str] = None
    company: Optional[str] = None


# ============================================================
# DASHBOARD SCHEMAS
# ============================================================

class DashboardResponse(APIModel):
    role: UserRole
    profile: Optional[User] = None
    recommended: Optional[List[Opportunity]] = None
    applications: Optional[List[ApplicationDetail]] = None
    posted: Optional[List[PostedOpportunity]] = None
    pending_approvals: Optional[List[ApplicationDetail]] = None
    awaiting_feedback: Optional[List[ApplicationDetail]] = None
