"""
Application Lifecycle Service

Creates applications and moves them through their states:

    applied -> interviewScheduled -> offerExtended -> completed
       |              |
       +--> rejected <+

`approved` is an acknowledgment state the placement cell may set from
`applied`; it can go on to interview or rejection like `applied`.

Mentor approval is a separate sub-state (pending / approved / rejected) on
the application. A mentor approval leaves the status alone; a mentor
rejection also rejects the application. Nothing advances past `applied`
while the mentor approval is pending.

Every transition is read-check-write under the application's lock, and a
failed guard leaves the catalog untouched.
"""

import logging
from datetime import date
from typing import Callable, Dict, FrozenSet, Optional, Union

from app.core.exceptions import (
    DeadlinePassed,
    DuplicateApplication,
    IdTaken,
    InvalidInput,
    InvalidState,
    PlacementError,
)
from app.db.catalog import InMemoryCatalog
from app.models.domain import (
    Application,
    ApplicationStatus,
    Feedback,
    MentorApproval,
    MentorApprovalStatus,
    MentorDecision,
    UserRole,
)
from app.utils.clock import MAX_ID_ATTEMPTS, Clock, IdFactory, random_id, system_today

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5

_OPEN_STATUSES = frozenset({ApplicationStatus.applied, ApplicationStatus.approved})

# action -> (source statuses, roles allowed to perform it)
TRANSITIONS: Dict[str, tuple] = {
    "mentor_decision": (
        frozenset({ApplicationStatus.applied}),
        frozenset({UserRole.faculty_mentor}),
    ),
    "acknowledge": (
        frozenset({ApplicationStatus.applied}),
        frozenset({UserRole.placement_cell}),
    ),
    "schedule_interview": (
        _OPEN_STATUSES,
        frozenset({UserRole.placement_cell}),
    ),
    "extend_offer": (
        frozenset({ApplicationStatus.interview_scheduled}),
        frozenset({UserRole.placement_cell}),
    ),
    "reject": (
        _OPEN_STATUSES | {ApplicationStatus.interview_scheduled},
        frozenset({UserRole.placement_cell}),
    ),
    "complete": (
        frozenset({ApplicationStatus.offer_extended}),
        frozenset({UserRole.placement_cell, UserRole.employer}),
    ),
}


class ApplicationLifecycleService:
    """
    State machine over Application.status and the mentor-approval sub-state.

    Args:
        catalog: Store the applications live in
        clock: Returns today's date (deadline checks, decision dates)
        id_factory: Builds new application ids from a prefix
    """

    def __init__(
        self,
        catalog: InMemoryCatalog,
        clock: Clock = system_today,
        id_factory: IdFactory = random_id
    ):
        self.catalog = catalog
        self.clock = clock
        self.id_factory = id_factory

    # ============================================================
    # APPLY
    # ============================================================

    def apply(
        self,
        student_id: str,
        opportunity_id: str,
        actor_id: Optional[str] = None
    ) -> Application:
        """
        Create an application in `applied` with mentor approval pending.

        Raises:
            NotFound: student or opportunity missing
            InvalidState: the user is not a student, or the actor is someone else
            DuplicateApplication: the student already applied to this opportunity
            DeadlinePassed: today is after the application deadline
            IdTaken: no free application id after MAX_ID_ATTEMPTS draws
        """
        try:
            if actor_id is not None and actor_id != student_id:
                raise InvalidState("Students can only apply for themselves")

            student = self.catalog.require_user(student_id)
            if not student.is_student:
                raise InvalidState(f"User {student_id} is not a student")

            opportunity = self.catalog.require_opportunity(opportunity_id)

            if self.catalog.find_application(student_id, opportunity_id) is not None:
                # insert_application() re-checks this under the catalog lock
                raise DuplicateApplication(
                    f"Student {student_id} already applied to opportunity {opportunity_id}"
                )

            today = self.clock()
            if today > opportunity.application_deadline:
                raise DeadlinePassed(
                    f"Applications for {opportunity_id} closed on "
                    f"{opportunity.application_deadline.isoformat()}"
                )

            for attempt in range(1, MAX_ID_ATTEMPTS + 1):
                application = Application(
                    id=self.id_factory("app"),
                    student_id=student_id,
                    opportunity_id=opportunity_id,
                    status=ApplicationStatus.applied,
                    applied_date=today,
                    mentor_approval=MentorApproval(status=MentorApprovalStatus.pending),
                )
                try:
                    self.catalog.insert_application(application)
                    break
                except IdTaken:
                    if attempt == MAX_ID_ATTEMPTS:
                        raise
                    logger.warning("Application id %s taken, drawing another", application.id)
        except PlacementError as e:
            logger.warning("Apply %s -> %s refused: %s", student_id, opportunity_id, e.message)
            raise

        logger.info("Application %s created: %s -> %s", application.id, student_id, opportunity_id)
        return application

    # ============================================================
    # MENTOR APPROVAL
    # ============================================================

    def decide_mentor_approval(
        self,
        application_id: str,
        decision: Union[MentorDecision, str],
        comments: str = "",
        actor_id: Optional[str] = None
    ) -> Application:
        """
        Record the mentor's decision. Decisions are made exactly once.

        Raises:
            NotFound: application missing
            InvalidInput: decision is neither approve nor reject
            InvalidState: a decision was already recorded, or the application
                is no longer in `applied`
        """
        try:
            decision = MentorDecision(decision)
        except ValueError:
            logger.warning("Mentor decision on %s refused: bad decision %r", application_id, decision)
            raise InvalidInput(f"Unknown mentor decision: {decision!r}") from None

        def build(current: Application) -> Application:
            if current.mentor_status != MentorApprovalStatus.pending:
                raise InvalidState(
                    f"Mentor already decided on {current.id} ({current.mentor_status.value})"
                )
            approval = MentorApproval(
                status=(
                    MentorApprovalStatus.approved
                    if decision == MentorDecision.approve
                    else MentorApprovalStatus.rejected
                ),
                comments=comments or "",
                date=self.clock(),
            )
            update = {"mentor_approval": approval}
            if decision == MentorDecision.reject:
                update["status"] = ApplicationStatus.rejected
            return current.model_copy(update=update)

        return self._transition(application_id, "mentor_decision", build, actor_id)

    # ============================================================
    # PLACEMENT CELL / EMPLOYER TRANSITIONS
    # ============================================================

    def acknowledge(self, application_id: str, actor_id: Optional[str] = None) -> Application:
        """applied -> approved, once the mentor has approved."""
        def build(current: Application) -> Application:
            self._require_mentor_approved(current)
            return current.model_copy(update={"status": ApplicationStatus.approved})

        return self._transition(application_id, "acknowledge", build, actor_id)

    def schedule_interview(
        self,
        application_id: str,
        interview_date: Optional[date] = None,
        actor_id: Optional[str] = None
    ) -> Application:
        """
        applied/approved -> interviewScheduled.

        Raises:
            InvalidState: mentor approval is not `approved`
            InvalidInput: interview_date is in the past
        """
        if interview_date is not None and interview_date < self.clock():
            logger.warning("Interview for %s refused: date %s is past", application_id, interview_date)
            raise InvalidInput(f"Interview date {interview_date.isoformat()} is in the past")

        def build(current: Application) -> Application:
            self._require_mentor_approved(current)
            return current.model_copy(update={
                "status": ApplicationStatus.interview_scheduled,
                "interview_date": interview_date,
            })

        return self._transition(application_id, "schedule_interview", build, actor_id)

    def extend_offer(self, application_id: str, actor_id: Optional[str] = None) -> Application:
        """interviewScheduled -> offerExtended."""
        def build(current: Application) -> Application:
            return current.model_copy(update={"status": ApplicationStatus.offer_extended})

        return self._transition(application_id, "extend_offer", build, actor_id)

    def reject(self, application_id: str, actor_id: Optional[str] = None) -> Application:
        """applied/approved/interviewScheduled -> rejected."""
        def build(current: Application) -> Application:
            return current.model_copy(update={"status": ApplicationStatus.rejected})

        return self._transition(application_id, "reject", build, actor_id)

    def complete_with_feedback(
        self,
        application_id: str,
        rating: int,
        comments: str = "",
        actor_id: Optional[str] = None
    ) -> Application:
        """
        offerExtended -> completed, attaching the feedback record.

        Raises:
            InvalidState: application is not in `offerExtended`
            InvalidInput: rating is not an integer from 1 to 5
        """
        def build(current: Application) -> Application:
            if isinstance(rating, bool) or not isinstance(rating, int):
                raise InvalidInput(f"Rating must be an integer, got {rating!r}")
            if not MIN_RATING <= rating <= MAX_RATING:
                raise InvalidInput(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")
            feedback = Feedback(rating=rating, comments=comments or "", date=self.clock())
            return current.model_copy(update={
                "status": ApplicationStatus.completed,
                "feedback": feedback,
            })

        return self._transition(application_id, "complete", build, actor_id)

    # ============================================================
    # HELPERS
    # ============================================================

    def _require_mentor_approved(self, application: Application) -> None:
        if application.mentor_status != MentorApprovalStatus.approved:
            raise InvalidState(
                f"Application {application.id} needs mentor approval "
                f"(currently {application.mentor_status.value})"
            )

    def _check_actor(self, actor_id: Optional[str], roles: FrozenSet[UserRole], action: str) -> None:
        if actor_id is None:
            return
        actor = self.catalog.require_user(actor_id)
        if actor.role not in roles:
            raise InvalidState(f"Role {actor.role.value} cannot perform {action}")

    def _transition(
        self,
        application_id: str,
        action: str,
        build: Callable[[Application], Application],
        actor_id: Optional[str]
    ) -> Application:
        sources, roles = TRANSITIONS[action]
        try:
            with self.catalog.application_lock(application_id):
                current = self.catalog.require_application(application_id)
                self._check_actor(actor_id, roles, action)
                if current.status not in sources:
                    raise InvalidState(
                        f"Cannot {action.replace('_', ' ')} application {application_id} "
                        f"in status {current.status.value}"
                    )
                updated = build(current)
                self.catalog.save_application(updated)
        except PlacementError as e:
            logger.warning("%s on %s refused: %s", action, application_id, e.message)
            raise

        logger.info(
            "Application %s: %s (%s -> %s)",
            application_id, action, current.status.value, updated.status.value
        )
        return updated
