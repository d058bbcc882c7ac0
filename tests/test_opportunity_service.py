"""
Unit tests for opportunity posting and the student skill profile
"""

import threading
import time
from datetime import date

import pytest

from app.core.exceptions import IdTaken, InvalidInput, InvalidState, NotFound


class TestPostOpportunity:

    def test_posts_with_generated_id_and_date(self, opportunities, catalog, clock):
        opportunity = opportunities.post_opportunity(
            author_id="placement-1",
            title="  Backend Intern ",
            company="Cloud Works",
            application_deadline=date(2026, 4, 30),
            required_skills=[" Python ", "Docker"],
            stipend=12000,
        )

        assert opportunity.id == "opp-10"
        assert opportunity.title == "Backend Intern"
        assert opportunity.required_skills == ["Python", "Docker"]
        assert opportunity.posted_by == "placement-1"
        assert opportunity.created_at == clock.today
        assert catalog.get_opportunity("opp-10") == opportunity

    def test_taken_id_is_redrawn(self, opportunities, catalog):
        drawn = iter(["opp-1", "opp-2", "opp-new"])
        opportunities.id_factory = lambda prefix: next(drawn)

        opportunity = opportunities.post_opportunity("placement-1", "Intern", "Co", date(2026, 4, 30))

        assert opportunity.id == "opp-new"
        assert catalog.get_opportunity("opp-1").title == "Intern opp-1"

    def test_gives_up_when_every_id_is_taken(self, opportunities, catalog):
        opportunities.id_factory = lambda prefix: "opp-1"
        before = catalog.list_opportunities()

        with pytest.raises(IdTaken):
            opportunities.post_opportunity("placement-1", "Intern", "Co", date(2026, 4, 30))

        assert catalog.list_opportunities() == before

    @pytest.mark.parametrize("title,company", [("", "Co"), ("Intern", "  "), (None, "Co")])
    def test_title_and_company_required(self, opportunities, title, company):
        with pytest.raises(InvalidInput):
            opportunities.post_opportunity("placement-1", title, company, date(2026, 4, 30))

    def test_blank_skill_is_refused(self, opportunities, catalog):
        before = catalog.list_opportunities()

        with pytest.raises(InvalidInput):
            opportunities.post_opportunity(
                "placement-1", "Intern", "Co", date(2026, 4, 30), required_skills=["Python", " "]
            )

        assert catalog.list_opportunities() == before

    def test_negative_stipend_is_refused(self, opportunities):
        with pytest.raises(InvalidInput):
            opportunities.post_opportunity("placement-1", "Intern", "Co", date(2026, 4, 30), stipend=-1)

    @pytest.mark.parametrize("author", ["student-1", "mentor-1", "employer-1"])
    def test_only_placement_cell_posts(self, opportunities, author):
        with pytest.raises(InvalidState):
            opportunities.post_opportunity(author, "Intern", "Co", date(2026, 4, 30))

    def test_unknown_author(self, opportunities):
        with pytest.raises(NotFound):
            opportunities.post_opportunity("ghost", "Intern", "Co", date(2026, 4, 30))


class TestSkills:

    def test_add_skill_appends(self, profiles, catalog):
        user = profiles.add_skill("student-1", "Docker")

        assert user.skills == ["JavaScript", "React", "Node.js", "Python", "Docker"]
        assert catalog.get_user("student-1").skills == user.skills

    def test_add_duplicate_is_kept(self, profiles):
        user = profiles.add_skill("student-1", "React")

        assert user.skills.count("React") == 2

    def test_add_blank_skill(self, profiles):
        with pytest.raises(InvalidInput):
            profiles.add_skill("student-1", "   ")

    def test_remove_skill_removes_every_occurrence(self, profiles):
        profiles.add_skill("student-1", "React")

        user = profiles.remove_skill("student-1", "React")

        assert user.skills == ["JavaScript", "Node.js", "Python"]

    def test_remove_is_exact_match(self, profiles):
        user = profiles.remove_skill("student-1", "react")

        assert "React" in user.skills

    def test_staff_have_no_skill_profile(self, profiles):
        with pytest.raises(InvalidState):
            profiles.add_skill("mentor-1", "Python")

    def test_old_snapshot_is_unchanged(self, profiles, catalog):
        before = catalog.get_user("student-1")

        profiles.add_skill("student-1", "Go")

        assert "Go" not in before.skills

    def test_concurrent_edits_keep_both_skills(self, profiles, catalog, monkeypatch):
        save_user = catalog.save_user

        def slow_save(user):
            time.sleep(0.05)
            return save_user(user)

        monkeypatch.setattr(catalog, "save_user", slow_save)
        barrier = threading.Barrier(2)

        def worker(skill):
            barrier.wait()
            profiles.add_skill("student-1", skill)

        threads = [threading.Thread(target=worker, args=(s,)) for s in ("Go", "Rust")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        skills = catalog.get_user("student-1").skills
        assert skills[:4] == ["JavaScript", "React", "Node.js", "Python"]
        assert sorted(skills[4:]) == ["Go", "Rust"]
