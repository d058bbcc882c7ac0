"""
Models module - Pydantic models for the portal's entities.

These models are used for:
- Catalog storage (users, opportunities, applications)
- Values passed between services and the API layer
"""

from app.models.domain import (
    Application,
    ApplicationStatus,
    Feedback,
    MentorApproval,
    MentorApprovalStatus,
    MentorDecision,
    Opportunity,
    Preferences,
    User,
    UserRole,
)

__all__ = [
    "Application",
    "ApplicationStatus",
    "Feedback",
    "MentorApproval",
    "MentorApprovalStatus",
    "MentorDecision",
    "Opportunity",
    "Preferences",
    "User",
    "UserRole",
]
