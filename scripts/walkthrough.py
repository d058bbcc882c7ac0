#!/usr/bin/env python3
"""
Placement Flow Walkthrough

Runs the demo data through the core services and prints each step:
1. Recommendations for the demo student
2. Apply to an opportunity (and a duplicate attempt)
3. Mentor approval
4. Interview, offer, completion with feedback

No server needed; everything runs against a fresh in-memory catalog.

Run: python scripts/walkthrough.py
"""
import sys
sys.path.insert(0, '.')

from datetime import date, timedelta

from app.core.exceptions import PlacementError
from app.db.catalog import InMemoryCatalog
from app.db.seed import seed_demo_data
from app.services.lifecycle_service import ApplicationLifecycleService
from app.services.recommendation_service import RecommendationService, explain_match


def main():
    today = date.today()
    catalog = InMemoryCatalog()
    seed_demo_data(catalog, today)

    student = catalog.require_user("user-1")
    recommender = RecommendationService(catalog)
    lifecycle = ApplicationLifecycleService(catalog)

    print("\n[1] Recommendations")
    print(f"    Skills: {', '.join(student.skills)}")
    for opportunity in recommender.recommend_for(student.id):
        match = explain_match(student, opportunity)
        print(f"    ✅ {opportunity.title} at {opportunity.company}: {match['reason']}")

    print("\n[2] Apply to opp-2")
    application = lifecycle.apply(student.id, "opp-2", actor_id=student.id)
    print(f"    {application.id}: {application.status.value}, mentor {application.mentor_status.value}")

    try:
        lifecycle.apply(student.id, "opp-2")
    except PlacementError as e:
        print(f"    ⚠️  Second apply refused: {type(e).__name__}: {e.message}")

    print("\n[3] Mentor approval")
    application = lifecycle.decide_mentor_approval(
        application.id, "approve", "Strong Python background", actor_id="mentor-1"
    )
    print(f"    mentor {application.mentor_status.value}, status {application.status.value}")

    print("\n[4] Interview -> offer -> completion")
    steps = [
        lambda: lifecycle.schedule_interview(application.id, today + timedelta(days=3), actor_id="placement-cell-1"),
        lambda: lifecycle.extend_offer(application.id, actor_id="placement-cell-1"),
        lambda: lifecycle.complete_with_feedback(application.id, 4, "Reliable intern", actor_id="placement-cell-1"),
    ]
    for step in steps:
        application = step()
        print(f"    -> {application.status.value}")

    print(f"\n    Feedback: {application.feedback.rating}/5 ({application.feedback.comments})")
    print("\n✅ Walkthrough complete")


if __name__ == "__main__":
    main()
