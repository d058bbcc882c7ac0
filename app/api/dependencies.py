"""
Service providers for route injection.

Each provider builds a service over the process catalog and clock. Tests
swap the catalog, clock or id factory through `app.dependency_overrides`.
"""

from fastapi import Depends

from app.core.config import get_settings
from app.db.catalog import InMemoryCatalog, get_catalog
from app.services.dashboard_service import DashboardService
from app.services.lifecycle_service import ApplicationLifecycleService
from app.services.opportunity_service import OpportunityService, ProfileService
from app.services.recommendation_service import RecommendationService
from app.utils.clock import Clock, IdFactory, random_id, system_today


def get_clock() -> Clock:
    return system_today


def get_id_factory() -> IdFactory:
    return random_id


def get_recommendation_service(
    catalog: InMemoryCatalog = Depends(get_catalog)
) -> RecommendationService:
    return RecommendationService(catalog, get_settings().match_threshold)


def get_lifecycle_service(
    catalog: InMemoryCatalog = Depends(get_catalog),
    clock: Clock = Depends(get_clock),
    id_factory: IdFactory = Depends(get_id_factory)
) -> ApplicationLifecycleService:
    return ApplicationLifecycleService(catalog, clock=clock, id_factory=id_factory)


def get_opportunity_service(
    catalog: InMemoryCatalog = Depends(get_catalog),
    clock: Clock = Depends(get_clock),
    id_factory: IdFactory = Depends(get_id_factory)
) -> OpportunityService:
    return OpportunityService(catalog, clock=clock, id_factory=id_factory)


def get_profile_service(catalog: InMemoryCatalog = Depends(get_catalog)) -> ProfileService:
    return ProfileService(catalog)


def get_dashboard_service(
    catalog: InMemoryCatalog = Depends(get_catalog),
    recommendations: RecommendationService = Depends(get_recommendation_service)
) -> DashboardService:
    return DashboardService(catalog, recommendations)
