"""
Demo data - the portal's sample accounts and listings.

Loaded at startup when SEED_DEMO_DATA is on. Deadlines are placed relative to
`today` so the sample opportunities stay open.
"""

import logging
from datetime import date, timedelta

from app.db.catalog import InMemoryCatalog
from app.models.domain import (
    Application,
    ApplicationStatus,
    MentorApproval,
    Opportunity,
    Preferences,
    User,
    UserRole,
)

logger = logging.getLogger(__name__)


def seed_demo_data(catalog: InMemoryCatalog, today: date) -> None:
    """Populate an empty catalog. Does nothing if users already exist."""
    if catalog.list_users():
        logger.info("Catalog already populated, skipping demo data")
        return

    catalog.add_user(User(
        id="user-1",
        name="Rajesh Kumar",
        email="rajesh.kumar@example.com",
        role=UserRole.student,
        department="Computer Science",
        skills=["JavaScript", "React", "Node.js", "Python"],
        preferences=Preferences(
            location="Ranchi",
            min_stipend=10000,
            max_stipend=25000,
            placement_conversion=True,
        ),
    ))
    catalog.add_user(User(
        id="placement-cell-1",
        name="Placement Cell",
        email="placement.cell@example.com",
        role=UserRole.placement_cell,
    ))
    catalog.add_user(User(
        id="mentor-1",
        name="Anita Sharma",
        email="anita.sharma@example.com",
        role=UserRole.faculty_mentor,
        department="Computer Science",
    ))
    catalog.add_user(User(
        id="employer-1",
        name="Tech Solutions Inc.",
        email="hr@techsolutions.example.com",
        role=UserRole.employer,
    ))

    catalog.add_opportunity(Opportunity(
        id="opp-1",
        title="Frontend Developer Intern",
        company="Tech Solutions Inc.",
        description="Work on cutting-edge web applications using React and TypeScript.",
        required_skills=["JavaScript", "React", "HTML", "CSS"],
        department="Computer Science",
        stipend=15000,
        duration="6 months",
        location="Ranchi",
        placement_conversion=True,
        application_deadline=today + timedelta(days=30),
        posted_by="placement-cell-1",
        created_at=today - timedelta(days=14),
    ))
    catalog.add_opportunity(Opportunity(
        id="opp-2",
        title="Data Science Trainee",
        company="Data Analytics Group",
        description="Analyze large datasets and build predictive models using Python and ML libraries.",
        required_skills=["Python", "Machine Learning", "SQL", "Data Visualization"],
        department="Computer Science",
        stipend=20000,
        duration="8 months",
        location="Remote",
        placement_conversion=True,
        application_deadline=today + timedelta(days=35),
        posted_by="placement-cell-1",
        created_at=today - timedelta(days=10),
    ))

    catalog.insert_application(Application(
        id="app-1",
        student_id="user-1",
        opportunity_id="opp-1",
        status=ApplicationStatus.applied,
        applied_date=today - timedelta(days=5),
        mentor_approval=MentorApproval(),
    ))

    logger.info(
        "Seeded demo data: %d users, %d opportunities, %d applications",
        len(catalog.list_users()),
        len(catalog.list_opportunities()),
        len(catalog.list_applications()),
    )
