"""
Shared fixtures: a small catalog, a fixed clock and predictable ids.
"""

from datetime import date
from itertools import count

import pytest

from app.db.catalog import InMemoryCatalog
from app.models.domain import Opportunity, User, UserRole
from app.services.lifecycle_service import ApplicationLifecycleService
from app.services.opportunity_service import OpportunityService, ProfileService
from app.services.recommendation_service import RecommendationService

TODAY = date(2026, 3, 10)


class SequentialIds:
    """Ids 'app-1', 'app-2', ... per prefix."""

    def __init__(self, start: int = 1):
        self._start = start
        self._counters = {}

    def __call__(self, prefix: str) -> str:
        counter = self._counters.setdefault(prefix, count(self._start))
        return f"{prefix}-{next(counter)}"


class FixedClock:
    def __init__(self, today: date = TODAY):
        self.today = today

    def __call__(self) -> date:
        return self.today


def make_opportunity(opportunity_id: str, required_skills, **overrides) -> Opportunity:
    fields = dict(
        id=opportunity_id,
        title=f"Intern {opportunity_id}",
        company="Tech Solutions Inc.",
        required_skills=list(required_skills),
        stipend=15000,
        application_deadline=date(2026, 4, 1),
        posted_by="placement-1",
        created_at=date(2026, 2, 1),
    )
    fields.update(overrides)
    return Opportunity(**fields)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def fresh_ids():
    # Numbered past the fixture catalog's own listings
    return SequentialIds(start=10)


@pytest.fixture
def catalog():
    catalog = InMemoryCatalog()
    catalog.add_user(User(
        id="student-1", name="Rajesh Kumar", email="rajesh.kumar@example.com",
        role=UserRole.student, department="Computer Science",
        skills=["JavaScript", "React", "Node.js", "Python"],
    ))
    catalog.add_user(User(
        id="student-2", name="Priya Singh", email="priya.singh@example.com",
        role=UserRole.student, skills=["SQL"],
    ))
    catalog.add_user(User(
        id="placement-1", name="Placement Cell", email="placement@example.com",
        role=UserRole.placement_cell,
    ))
    catalog.add_user(User(
        id="mentor-1", name="Anita Sharma", email="anita.sharma@example.com",
        role=UserRole.faculty_mentor,
    ))
    catalog.add_user(User(
        id="employer-1", name="Tech Solutions Inc.", email="hr@example.com",
        role=UserRole.employer,
    ))
    catalog.add_opportunity(make_opportunity("opp-1", ["JavaScript", "React", "HTML", "CSS"]))
    catalog.add_opportunity(make_opportunity(
        "opp-2", ["Python", "Machine Learning", "SQL", "Data Visualization"],
        company="Data Analytics Group", application_deadline=date(2026, 3, 20),
    ))
    catalog.add_opportunity(make_opportunity(
        "opp-closed", ["Python"], application_deadline=date(2026, 3, 9),
    ))
    return catalog


@pytest.fixture
def lifecycle(catalog, clock, ids):
    return ApplicationLifecycleService(catalog, clock=clock, id_factory=ids)


@pytest.fixture
def opportunities(catalog, clock, fresh_ids):
    return OpportunityService(catalog, clock=clock, id_factory=fresh_ids)


@pytest.fixture
def profiles(catalog):
    return ProfileService(catalog)


@pytest.fixture
def recommendations(catalog):
    return RecommendationService(catalog, threshold=0.5)


@pytest.fixture
def opportunity_factory():
    return make_opportunity
