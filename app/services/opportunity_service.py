"""
Opportunity posting and student skill profile.

Opportunities are immutable once posted: there is no edit or withdraw here.
A future edit/withdraw should be its own explicit operation, not an overwrite.
"""

import logging
from datetime import date
from typing import List, Optional

from app.core.exceptions import IdTaken, InvalidInput, InvalidState
from app.db.catalog import InMemoryCatalog
from app.models.domain import Opportunity, User, UserRole
from app.utils.clock import MAX_ID_ATTEMPTS, Clock, IdFactory, random_id, system_today

logger = logging.getLogger(__name__)


def clean_skills(skills: List[str]) -> List[str]:
    """Strip each skill; blank entries are an error, not silently dropped."""
    cleaned = []
    for skill in skills:
        value = (skill or "").strip()
        if not value:
            raise InvalidInput("Skills cannot be blank")
        cleaned.append(value)
    return cleaned


class OpportunityService:
    """Placement-cell postings."""

    def __init__(
        self,
        catalog: InMemoryCatalog,
        clock: Clock = system_today,
        id_factory: IdFactory = random_id
    ):
        self.catalog = catalog
        self.clock = clock
        self.id_factory = id_factory

    def post_opportunity(
        self,
        author_id: str,
        title: str,
        company: str,
        application_deadline: date,
        description: str = "",
        required_skills: Optional[List[str]] = None,
        department: str = "",
        stipend: int = 0,
        duration: str = "",
        location: str = "",
        placement_conversion: bool = False
    ) -> Opportunity:
        """
        Post a new opportunity on behalf of a placement-cell user.

        Raises:
            NotFound: author does not exist
            InvalidState: author is not placement cell
            InvalidInput: blank title/company, negative stipend, blank skill
            IdTaken: no free opportunity id after MAX_ID_ATTEMPTS draws
        """
        author = self.catalog.require_user(author_id)
        if author.role != UserRole.placement_cell:
            raise InvalidState(f"Only the placement cell can post opportunities, not {author.role.value}")

        title = (title or "").strip()
        company = (company or "").strip()
        if not title or not company:
            raise InvalidInput("Title and company are required")
        if isinstance(stipend, bool) or not isinstance(stipend, int) or stipend < 0:
            raise InvalidInput("Stipend must be a non-negative integer")

        fields = dict(
            title=title,
            company=company,
            description=description or "",
            required_skills=clean_skills(required_skills or []),
            department=department or "",
            stipend=stipend,
            duration=duration or "",
            location=location or "",
            placement_conversion=placement_conversion,
            application_deadline=application_deadline,
            posted_by=author_id,
            created_at=self.clock(),
        )
        for attempt in range(1, MAX_ID_ATTEMPTS + 1):
            opportunity = Opportunity(id=self.id_factory("opp"), **fields)
            try:
                self.catalog.add_opportunity(opportunity)
                break
            except IdTaken:
                if attempt == MAX_ID_ATTEMPTS:
                    logger.error("No free opportunity id after %d attempts", attempt)
                    raise
                logger.warning("Opportunity id %s taken, drawing another", opportunity.id)

        logger.info("Opportunity %s posted by %s: %s at %s", opportunity.id, author_id, title, company)
        return opportunity


class ProfileService:
    """A student's skill list."""

    def __init__(self, catalog: InMemoryCatalog):
        self.catalog = catalog

    def _check_student(self, user: User) -> None:
        if not user.is_student:
            raise InvalidState(f"Only students have a skill profile, not {user.role.value}")

    def add_skill(self, user_id: str, skill: str) -> User:
        """Append a skill. Duplicates are kept; order is display order."""
        def change(user: User) -> User:
            self._check_student(user)
            value = clean_skills([skill])[0]
            return user.model_copy(update={"skills": [*user.skills, value]})

        return self.catalog.update_user(user_id, change)

    def remove_skill(self, user_id: str, skill: str) -> User:
        """Remove every exact occurrence of a skill."""
        def change(user: User) -> User:
            self._check_student(user)
            return user.model_copy(update={"skills": [s for s in user.skills if s != skill]})

        return self.catalog.update_user(user_id, change)
