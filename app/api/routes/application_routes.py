"""
Application Routes

GET /applications/{application_id} - Get application
POST /applications/{application_id}/mentor-decision - Approve/reject (faculty mentor)
POST /applications/{application_id}/acknowledge - applied -> approved (placement cell)
POST /applications/{application_id}/interview - Schedule interview (placement cell)
POST /applications/{application_id}/offer - Extend offer (placement cell)
POST /applications/{application_id}/reject - Reject (placement cell)
POST /applications/{application_id}/complete - Complete with feedback (placement cell/employer)

Role and state rules live in the lifecycle service; a refused transition
comes back as 409.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_lifecycle_service
from app.core.auth import get_current_user
from app.db.catalog import InMemoryCatalog, get_catalog
from app.models.domain import Application, User
from app.schemas.schemas import (
    FeedbackRequest, InterviewScheduleRequest, MentorDecisionRequest
)
from app.services.lifecycle_service import ApplicationLifecycleService

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("/{application_id}", response_model=Application)
async def get_application(
    application_id: str,
    user: User = Depends(get_current_user),
    catalog: InMemoryCatalog = Depends(get_catalog)
):
    return catalog.require_application(application_id)


@router.post("/{application_id}/mentor-decision", response_model=Application)
async def decide_mentor_approval(
    application_id: str,
    data: MentorDecisionRequest,
    user: User = Depends(get_current_user),
    service: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    """Record the mentor's decision. A rejection also rejects the application."""
    return service.decide_mentor_approval(
        application_id, data.decision, data.comments, actor_id=user.id
    )


@router.post("/{application_id}/acknowledge", response_model=Application)
async def acknowledge(
    application_id: str,
    user: User = Depends(get_current_user),
    service: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    return service.acknowledge(application_id, actor_id=user.id)


@router.post("/{application_id}/interview", response_model=Application)
async def schedule_interview(
    application_id: str,
    data: InterviewScheduleRequest,
    user: User = Depends(get_current_user),
    service: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    """Schedule an interview. Requires mentor approval."""
    return service.schedule_interview(application_id, data.interview_date, actor_id=user.id)


@router.post("/{application_id}/offer", response_model=Application)
async def extend_offer(
    application_id: str,
    user: User = Depends(get_current_user),
    service: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    return service.extend_offer(application_id, actor_id=user.id)


@router.post("/{application_id}/reject", response_model=Application)
async def reject(
    application_id: str,
    user: User = Depends(get_current_user),
    service: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    return service.reject(application_id, actor_id=user.id)


@router.post("/{application_id}/complete", response_model=Application)
async def complete_with_feedback(
    application_id: str,
    data: FeedbackRequest,
    user: User = Depends(get_current_user),
    service: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    """Mark an accepted offer as completed, with a 1-5 rating."""
    return service.complete_with_feedback(
        application_id, data.rating, data.comments, actor_id=user.id
    )
