"""
tests/test_recommendation_service.py — Store-Backed Recommendations & Stats
============================================================================
"""

from __future__ import annotations

import random

from conftest import add_event, add_skill, add_user
from memorywall.services.event_service import register_for_event
from memorywall.services.post_service import create_post
from memorywall.services.recommendation_service import event_recommendations, skill_suggestions
from memorywall.services.stats_service import platform_stats


class TestRecommendations:
    def test_unknown_user_gets_nothing(self, seeded_store):
        assert event_recommendations(seeded_store, "ghost") == []
        assert skill_suggestions(seeded_store, "ghost") == []

    def test_seeded_user_ranking(self, seeded_store):
        ranked = event_recommendations(seeded_store, "user_rahul", rng=random.Random(0))
        assert ranked[0]["id"] == "ev_1"
        assert ranked[0]["match_pct"] == 88

    def test_registered_events_drop_out(self, seeded_store):
        register_for_event(seeded_store, "ev_1", "user_rahul")
        ids = [e["id"] for e in event_recommendations(seeded_store, "user_rahul")]
        assert "ev_1" not in ids
        assert len(ids) == 4

    def test_seeded_skills(self, seeded_store):
        skills = skill_suggestions(seeded_store, "user_rahul")
        assert skills
        assert all(s["score"] > 0 for s in skills)
        assert all(10 <= s["level"] <= 90 for s in skills)

    def test_new_user_follows_activity(self, store):
        add_user(store, "ana")
        add_event(store, "fest", ["#cultural"])
        add_event(store, "hack", ["#hackathon", "#coding"])
        add_skill(store, "dance", ["#cultural"])
        add_skill(store, "git", ["#hackathon"])

        assert skill_suggestions(store, "ana") == []
        register_for_event(store, "hack", "ana")

        assert [s["id"] for s in skill_suggestions(store, "ana")] == ["git"]


class TestPlatformStats:
    def test_seeded_counts(self, seeded_store):
        assert platform_stats(seeded_store) == {
            "total_posts": 6,
            "total_students": 3,
            "total_alumni": 0,
            "total_events": 5,
        }

    def test_pending_posts_not_counted(self, seeded_store, cfg):
        create_post(
            seeded_store, cfg,
            title="Hello", content="World", tags=[], category="General",
            author_id="user_priya",
        )
        assert platform_stats(seeded_store)["total_posts"] == 6

    def test_empty_medium(self, store):
        assert platform_stats(store) == {
            "total_posts": 0, "total_students": 0, "total_alumni": 0, "total_events": 0,
        }

    def test_alumni_counted(self, store):
        add_user(store, "old", role="alumni")
        add_user(store, "new")
        stats = platform_stats(store)
        assert stats["total_alumni"] == 1
        assert stats["total_students"] == 1
