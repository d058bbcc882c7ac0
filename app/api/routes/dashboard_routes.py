"""
Dashboard Routes

GET /dashboard - Role-specific dashboard for the acting user
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_dashboard_service
from app.core.auth import get_current_user
from app.models.domain import User
from app.schemas.schemas import DashboardResponse
from app.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    user: User = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service)
):
    """
    Student: profile, recommendations, own applications.
    Placement cell: posted opportunities with application counts.
    Faculty mentor: applications awaiting mentor approval.
    Employer: offers awaiting completion feedback.
    """
    return DashboardResponse.model_validate(service.build_dashboard(user.id))
