"""
Skill Matching & Recommendation Service

PURPOSE:
Decide which opportunities are surfaced to a student as "recommended".

HOW IT WORKS:
1. Lower-case both skill lists
2. A required skill matches when it contains, or is contained in, any
   student skill ("node" matches "Node.js", "Machine Learning" matches "ML"
   only if one contains the other)
3. An opportunity is recommended when the matched count reaches
   ceil(threshold x required count); threshold defaults to 0.5
4. Opportunities with no required skills are always recommended

ORDERING:
recommend() keeps catalog order. rank_recommendations() is the stronger
ordering: match fraction (desc), then application deadline (asc).
"""

import logging
import math
from typing import Dict, List, Optional, Sequence

from app.core.config import get_settings
from app.db.catalog import InMemoryCatalog
from app.models.domain import Opportunity, User

logger = logging.getLogger(__name__)


# ============================================================
# SKILL MATCHING
# ============================================================

def skill_matches(required_skill: str, student_skill: str) -> bool:
    """Case-insensitive substring match in either direction."""
    required = required_skill.lower()
    offered = student_skill.lower()
    return required in offered or offered in required


def matched_skills(student_skills: Sequence[str], required_skills: Sequence[str]) -> List[str]:
    """
    Required skills covered by at least one student skill.

    Blank student skills are ignored; an empty string is contained in every
    other string and would otherwise match everything.

    Returns:
        The matched required skills, in the opportunity's order
    """
    offered = [s for s in student_skills if s.strip()]
    return [
        required for required in required_skills
        if any(skill_matches(required, skill) for skill in offered)
    ]


def required_match_count(required_count: int, threshold: float) -> int:
    """Minimum number of matched skills: ceil(threshold x required_count)."""
    # round() absorbs float noise such as 0.3 * 10 == 3.0000000000000004
    return math.ceil(round(threshold * required_count, 9))


def match_fraction(student_skills: Sequence[str], required_skills: Sequence[str]) -> float:
    """
    Share of required skills the student covers.

    Returns:
        Float between 0 and 1 (1.0 when nothing is required)
    """
    if not required_skills:
        return 1.0
    return len(matched_skills(student_skills, required_skills)) / len(required_skills)


def is_recommended(
    student_skills: Sequence[str],
    opportunity: Opportunity,
    threshold: float = 0.5
) -> bool:
    matched = matched_skills(student_skills, opportunity.required_skills)
    return len(matched) >= required_match_count(len(opportunity.required_skills), threshold)


# ============================================================
# RECOMMENDATION
# ============================================================

def recommend(
    student: User,
    opportunities: Sequence[Opportunity],
    threshold: Optional[float] = None
) -> List[Opportunity]:
    """
    Opportunities recommended to a student, in catalog order.

    Callers may pass any user: a non-student simply gets an empty list.

    Args:
        student: The user to recommend for
        opportunities: The opportunity catalog
        threshold: Fraction of required skills to cover (default from settings)
    """
    if not student.is_student:
        return []

    if threshold is None:
        threshold = get_settings().match_threshold

    return [o for o in opportunities if is_recommended(student.skills, o, threshold)]


def rank_recommendations(
    student: User,
    opportunities: Sequence[Opportunity],
    threshold: Optional[float] = None
) -> List[Opportunity]:
    """
    Same set as recommend(), ordered by match fraction (desc) then deadline (asc).
    Ties keep catalog order.
    """
    recommended = recommend(student, opportunities, threshold)
    return sorted(
        recommended,
        key=lambda o: (-match_fraction(student.skills, o.required_skills), o.application_deadline)
    )


def explain_match(student: User, opportunity: Opportunity) -> Dict:
    """Matched skills and a short human-readable reason for one opportunity."""
    matched = matched_skills(student.skills, opportunity.required_skills)
    fraction = match_fraction(student.skills, opportunity.required_skills)
    missing = [s for s in opportunity.required_skills if s not in matched]

    pct = int(round(fraction * 100))
    if not opportunity.required_skills:
        reason = "No specific skills required"
    elif pct >= 80:
        reason = f"Excellent skill match ({pct}%)"
    elif pct >= 50:
        reason = f"Good skill match ({pct}%)"
    else:
        reason = f"Partial skill match ({pct}%)"

    return {
        "opportunity_id": opportunity.id,
        "matched_skills": matched,
        "missing_skills": missing,
        "match_fraction": round(fraction, 4),
        "reason": reason,
    }


class RecommendationService:
    """Recommendations for a student looked up in the catalog."""

    def __init__(self, catalog: InMemoryCatalog, threshold: Optional[float] = None):
        self.catalog = catalog
        self.threshold = get_settings().match_threshold if threshold is None else threshold

    def recommend_for(self, student_id: str, ranked: bool = False) -> List[Opportunity]:
        """
        Args:
            student_id: Catalog user id
            ranked: Use match-fraction/deadline ordering instead of catalog order

        Raises:
            NotFound: if the user does not exist
        """
        student = self.catalog.require_user(student_id)
        opportunities = self.catalog.list_opportunities()

        if ranked:
            results = rank_recommendations(student, opportunities, self.threshold)
        else:
            results = recommend(student, opportunities, self.threshold)

        logger.debug(
            "Recommended %d of %d opportunities to %s",
            len(results), len(opportunities), student_id
        )
        return results
