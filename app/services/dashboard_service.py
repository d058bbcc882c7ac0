"""
Dashboard read models - one view per role.
"""

from typing import Dict, List

from app.db.catalog import InMemoryCatalog
from app.models.domain import Application, ApplicationStatus, User, UserRole
from app.services.recommendation_service import RecommendationService


class DashboardService:

    def __init__(self, catalog: InMemoryCatalog, recommendations: RecommendationService):
        self.catalog = catalog
        self.recommendations = recommendations

    def build_dashboard(self, user_id: str) -> Dict:
        user = self.catalog.require_user(user_id)

        if user.role == UserRole.student:
            return self._student_dashboard(user)
        elif user.role == UserRole.placement_cell:
            return self._placement_cell_dashboard(user)
        elif user.role == UserRole.faculty_mentor:
            return self._mentor_dashboard(user)
        elif user.role == UserRole.employer:
            return self._employer_dashboard(user)
        raise ValueError(f"Unhandled role: {user.role}")

    def _with_opportunity(self, applications: List[Application]) -> List[Dict]:
        """Pair each application with its opportunity's title and company."""
        rows = []
        for application in applications:
            opportunity = self.catalog.get_opportunity(application.opportunity_id)
            rows.append({
                "application": application,
                "opportunity_title": opportunity.title if opportunity else None,
                "company": opportunity.company if opportunity else None,
            })
        return rows

    def _student_dashboard(self, user: User) -> Dict:
        return {
            "role": user.role,
            "profile": user,
            "recommended": self.recommendations.recommend_for(user.id),
            "applications": self._with_opportunity(self.catalog.list_applications(student_id=user.id)),
        }

    def _placement_cell_dashboard(self, user: User) -> Dict:
        return {
            "role": user.role,
            "posted": [
                {"opportunity": o, "application_count": self.catalog.count_applications(o.id)}
                for o in self.catalog.opportunities_posted_by(user.id)
            ],
        }

    def _mentor_dashboard(self, user: User) -> Dict:
        return {
            "role": user.role,
            "pending_approvals": self._with_opportunity(self.catalog.pending_mentor_approvals()),
        }

    def _employer_dashboard(self, user: User) -> Dict:
        # Employers are matched to listings by company name
        company_ids = {o.id for o in self.catalog.list_opportunities() if o.company == user.name}
        awaiting = [
            a for a in self.catalog.list_applications()
            if a.status == ApplicationStatus.offer_extended and a.opportunity_id in company_ids
        ]
        return {
            "role": user.role,
            "awaiting_feedback": self._with_opportunity(awaiting),
        }
