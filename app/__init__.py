"""
Campus Internship & Placement Hub
Matching and application-lifecycle core for a campus placement portal.

Architecture:
- app.db: In-memory catalog (users, opportunities, applications)
- app.services: Recommendation engine, lifecycle state machine, postings, dashboards
- app.api: FastAPI host that calls into the services
"""

__version__ = "1.0.0"
