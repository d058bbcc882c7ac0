"""
Student Routes

GET /students/me - Get own profile
POST /students/me/skills - Add skill
DELETE /students/me/skills/{skill} - Remove skill (every occurrence)
GET /students/me/recommendations - Recommended opportunities
GET /students/me/applications - Get my applications
"""

from fastapi import APIRouter, Depends, Query
from typing import List

from app.api.dependencies import get_profile_service, get_recommendation_service
from app.core.auth import get_current_student
from app.db.catalog import InMemoryCatalog, get_catalog
from app.models.domain import User
from app.schemas.schemas import (
    ApplicationDetail, RecommendationListResponse, RecommendationResponse, SkillAdd
)
from app.services.opportunity_service import ProfileService
from app.services.recommendation_service import RecommendationService, explain_match

router = APIRouter(prefix="/students/me", tags=["Students"])


@router.get("", response_model=User)
async def get_profile(student: User = Depends(get_current_student)):
    return student


@router.post("/skills", response_model=User, status_code=201)
async def add_skill(
    data: SkillAdd,
    student: User = Depends(get_current_student),
    service: ProfileService = Depends(get_profile_service)
):
    """Add a skill to the profile. Duplicates are kept."""
    return service.add_skill(student.id, data.skill)


@router.delete("/skills/{skill}", response_model=User)
async def remove_skill(
    skill: str,
    student: User = Depends(get_current_student),
    service: ProfileService = Depends(get_profile_service)
):
    return service.remove_skill(student.id, skill)


@router.get("/recommendations", response_model=RecommendationListResponse)
async def get_recommendations(
    ranked: bool = Query(False, description="Order by match fraction, then deadline"),
    student: User = Depends(get_current_student),
    service: RecommendationService = Depends(get_recommendation_service)
):
    """
    Get recommended opportunities.

    An opportunity is recommended when at least half of its required skills
    match the student's skills (case-insensitive, substring either way).
    Default order is catalog order.
    """
    recs = [
        RecommendationResponse(opportunity=o, **explain_match(student, o))
        for o in service.recommend_for(student.id, ranked=ranked)
    ]
    return RecommendationListResponse(recommendations=recs, total=len(recs))


@router.get("/applications", response_model=List[ApplicationDetail])
async def get_my_applications(
    student: User = Depends(get_current_student),
    catalog: InMemoryCatalog = Depends(get_catalog)
):
    """Get all applications submitted by the current student."""
    details = []
    for application in catalog.list_applications(student_id=student.id):
        opportunity = catalog.get_opportunity(application.opportunity_id)
        details.append(ApplicationDetail(
            application=application,
            opportunity_title=opportunity.title if opportunity else None,
            company=opportunity.company if opportunity else None,
        ))
    return details
