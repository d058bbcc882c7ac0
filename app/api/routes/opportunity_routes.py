"""
Opportunity Routes

GET /opportunities - List all opportunities (posting order)
GET /opportunities/{opportunity_id} - Get opportunity details
POST /opportunities - Post an opportunity (placement cell only)
POST /opportunities/{opportunity_id}/apply - Apply (student only)
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from app.api.dependencies import get_lifecycle_service, get_opportunity_service
from app.core.auth import get_current_student, get_current_user
from app.db.catalog import InMemoryCatalog, get_catalog
from app.models.domain import Application, Opportunity, User
from app.schemas.schemas import OpportunityCreate
from app.services.lifecycle_service import ApplicationLifecycleService
from app.services.opportunity_service import OpportunityService

router = APIRouter(prefix="/opportunities", tags=["Opportunities"])


@router.get("", response_model=List[Opportunity])
async def list_opportunities(
    posted_by: Optional[str] = Query(None, description="Only listings posted by this user"),
    catalog: InMemoryCatalog = Depends(get_catalog)
):
    """List opportunities in the order they were posted."""
    if posted_by:
        return catalog.opportunities_posted_by(posted_by)
    return catalog.list_opportunities()


@router.get("/{opportunity_id}", response_model=Opportunity)
async def get_opportunity(opportunity_id: str, catalog: InMemoryCatalog = Depends(get_catalog)):
    return catalog.require_opportunity(opportunity_id)


@router.post("", response_model=Opportunity, status_code=201)
async def post_opportunity(
    data: OpportunityCreate,
    user: User = Depends(get_current_user),
    service: OpportunityService = Depends(get_opportunity_service)
):
    """Post a new opportunity. Only the placement cell can post; listings are never edited."""
    return service.post_opportunity(
        author_id=user.id,
        title=data.title,
        company=data.company,
        application_deadline=data.application_deadline,
        description=data.description,
        required_skills=data.required_skills,
        department=data.department,
        stipend=data.stipend,
        duration=data.duration,
        location=data.location,
        placement_conversion=data.placement_conversion,
    )


@router.post("/{opportunity_id}/apply", response_model=Application, status_code=201)
async def apply_to_opportunity(
    opportunity_id: str,
    student: User = Depends(get_current_student),
    service: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    """Apply to an opportunity. Cannot apply twice or after the deadline."""
    return service.apply(student.id, opportunity_id, actor_id=student.id)
