"""
In-Memory Catalog

The catalog is the only store the core talks to. It holds three tables keyed
by id:
- users
- opportunities
- applications (plus a unique index on (student_id, opportunity_id))

Nothing is persisted; the host process owns one catalog for its lifetime.

CONCURRENCY:
- Every read and write of the tables happens under one re-entrant lock.
- insert_application() checks the unique index and inserts in one step, so two
  concurrent applies for the same pair cannot both succeed.
- application_lock() gives services an exclusive section per application for
  read-check-write transitions. Locks exist only for stored applications.
- update_user() runs a read-change-save of one user under the catalog lock.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from app.core.exceptions import DuplicateApplication, IdTaken, InvalidInput, InvalidState, NotFound
from app.models.domain import Application, MentorApprovalStatus, Opportunity, User

logger = logging.getLogger(__name__)


class InMemoryCatalog:
    """Tables keyed by id. Stored values are frozen models, replaced on write."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._opportunities: Dict[str, Opportunity] = {}
        self._applications: Dict[str, Application] = {}
        self._pair_index: Dict[Tuple[str, str], str] = {}

        self._lock = threading.RLock()
        self._application_locks: Dict[str, threading.Lock] = {}

    # ============================================================
    # USERS
    # ============================================================

    def add_user(self, user: User) -> User:
        with self._lock:
            if user.id in self._users:
                raise InvalidInput(f"User {user.id} already exists")
            self._users[user.id] = user
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def require_user(self, user_id: str) -> User:
        user = self.get_user(user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        return user

    def save_user(self, user: User) -> User:
        """Replace a stored user. The role cannot change once assigned."""
        with self._lock:
            current = self._users.get(user.id)
            if current is None:
                raise NotFound(f"User {user.id} not found")
            if current.role != user.role:
                raise InvalidState(f"Role of user {user.id} cannot change")
            self._users[user.id] = user
        return user

    def update_user(self, user_id: str, change: Callable[[User], User]) -> User:
        """Read, change and save a user as one step under the catalog lock."""
        with self._lock:
            return self.save_user(change(self.require_user(user_id)))

    def list_users(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    # ============================================================
    # OPPORTUNITIES
    # ============================================================

    def add_opportunity(self, opportunity: Opportunity) -> Opportunity:
        with self._lock:
            if opportunity.id in self._opportunities:
                raise IdTaken(f"Opportunity id {opportunity.id} is taken")
            self._opportunities[opportunity.id] = opportunity
        return opportunity

    def get_opportunity(self, opportunity_id: str) -> Optional[Opportunity]:
        with self._lock:
            return self._opportunities.get(opportunity_id)

    def require_opportunity(self, opportunity_id: str) -> Opportunity:
        opportunity = self.get_opportunity(opportunity_id)
        if opportunity is None:
            raise NotFound(f"Opportunity {opportunity_id} not found")
        return opportunity

    def list_opportunities(self) -> List[Opportunity]:
        """All opportunities in posting order."""
        with self._lock:
            return list(self._opportunities.values())

    def opportunities_posted_by(self, user_id: str) -> List[Opportunity]:
        return [o for o in self.list_opportunities() if o.posted_by == user_id]

    # ============================================================
    # APPLICATIONS
    # ============================================================

    def insert_application(self, application: Application) -> Application:
        """Store a new application; the (student, opportunity) pair is a unique key."""
        key = (application.student_id, application.opportunity_id)
        with self._lock:
            if key in self._pair_index:
                raise DuplicateApplication(
                    f"Student {application.student_id} already applied to "
                    f"opportunity {application.opportunity_id}"
                )
            if application.id in self._applications:
                raise IdTaken(f"Application id {application.id} is taken")
            self._applications[application.id] = application
            self._pair_index[key] = application.id
        return application

    def get_application(self, application_id: str) -> Optional[Application]:
        with self._lock:
            return self._applications.get(application_id)

    def require_application(self, application_id: str) -> Application:
        application = self.get_application(application_id)
        if application is None:
            raise NotFound(f"Application {application_id} not found")
        return application

    def find_application(self, student_id: str, opportunity_id: str) -> Optional[Application]:
        with self._lock:
            application_id = self._pair_index.get((student_id, opportunity_id))
            if application_id is None:
                return None
            return self._applications[application_id]

    def save_application(self, application: Application) -> Application:
        """Replace a stored application. Student and opportunity are fixed."""
        with self._lock:
            current = self._applications.get(application.id)
            if current is None:
                raise NotFound(f"Application {application.id} not found")
            if (current.student_id, current.opportunity_id) != (
                application.student_id, application.opportunity_id
            ):
                raise InvalidState(f"Application {application.id} cannot be re-linked")
            self._applications[application.id] = application
        return application

    def list_applications(
        self,
        student_id: Optional[str] = None,
        opportunity_id: Optional[str] = None
    ) -> List[Application]:
        with self._lock:
            applications = list(self._applications.values())
        if student_id is not None:
            applications = [a for a in applications if a.student_id == student_id]
        if opportunity_id is not None:
            applications = [a for a in applications if a.opportunity_id == opportunity_id]
        return applications

    def count_applications(self, opportunity_id: str) -> int:
        return len(self.list_applications(opportunity_id=opportunity_id))

    def pending_mentor_approvals(self) -> List[Application]:
        return [
            a for a in self.list_applications()
            if a.mentor_status == MentorApprovalStatus.pending and not a.is_terminal
        ]

    @contextmanager
    def application_lock(self, application_id: str) -> Iterator[None]:
        """
        Exclusive section for one existing application.
        Raises NotFound before any lock is created for an unknown id.
        Usage:
            with catalog.application_lock(app_id):
                current = catalog.require_application(app_id)
                catalog.save_application(next_version)
        """
        with self._lock:
            if application_id not in self._applications:
                raise NotFound(f"Application {application_id} not found")
            lock = self._application_locks.setdefault(application_id, threading.Lock())
        with lock:
            yield


# Global catalog (the host process owns exactly one)
_catalog: Optional[InMemoryCatalog] = None


def get_catalog() -> InMemoryCatalog:
    """Get or create the process-wide catalog (singleton pattern)"""
    global _catalog
    if _catalog is None:
        _catalog = InMemoryCatalog()
        logger.info("Created in-memory catalog")
    return _catalog
