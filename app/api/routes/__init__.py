"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.opportunity_routes import router as opportunity_router
from app.api.routes.student_routes import router as student_router
from app.api.routes.application_routes import router as application_router
from app.api.routes.dashboard_routes import router as dashboard_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(opportunity_router)
api_router.include_router(student_router)
api_router.include_router(application_router)
api_router.include_router(dashboard_router)
