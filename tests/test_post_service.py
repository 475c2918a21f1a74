"""
tests/test_post_service.py — Posts, Reactions & Moderation
===========================================================

Exercises the post service against an in-memory store seeded with the
reference dataset.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from conftest import add_user, affinity_of
from memorywall.constants import DEFAULT_POST_EMOJI, FLAGGED, POSTS
from memorywall.errors import AuthError, NotFoundError, ValidationError
from memorywall.services import post_service as ps


def _post(store, post_id):
    return next(p for p in store.get(POSTS, []) if p["id"] == post_id)


def _create(store, cfg, author_id="user_rahul", **overrides):
    fields = {
        "title": "Team up for the hackathon",
        "content": "Looking for two teammates who like backend work.",
        "tags": ["#hackathon"],
        "category": "Events",
        "author_id": author_id,
    }
    fields.update(overrides)
    return ps.create_post(store, cfg, **fields)


# ---------------------------------------------------------------------------
# create_post
# ---------------------------------------------------------------------------
class TestCreatePost:
    def test_clean_post_awaits_review(self, seeded_store, cfg):
        before = affinity_of(seeded_store, "user_rahul")["#hackathon"]

        post_id = _create(seeded_store, cfg)

        posts = seeded_store.get(POSTS)
        assert posts[0]["id"] == post_id
        post = posts[0]
        assert post["status"] == "pending_review"
        assert post["emoji"] == DEFAULT_POST_EMOJI
        assert post["likes"] == [] and post["claps"] == []
        assert post["author_initials"] == "RK"
        assert affinity_of(seeded_store, "user_rahul")["#hackathon"] == before + 2
        assert seeded_store.get(FLAGGED) == []

    def test_not_visible_until_approved(self, seeded_store, cfg):
        post_id = _create(seeded_store, cfg)
        assert post_id not in {p["id"] for p in ps.list_posts(seeded_store)}

    @pytest.mark.parametrize("title", ["Free spam giveaway", "I HATE exams"])
    def test_denylisted_post_is_flagged(self, seeded_store, cfg, title):
        post_id = _create(seeded_store, cfg, title=title)

        assert _post(seeded_store, post_id)["status"] == "flagged"
        [flag] = seeded_store.get(FLAGGED)
        assert flag["target_id"] == post_id
        assert flag["reporter"] == "system"
        assert flag["reason"] == "keyword_match"
        assert flag["type"] == "post"

    def test_flagged_post_still_bumps_author(self, store, cfg):
        add_user(store, "ana")
        _create(store, cfg, author_id="ana", content="this is spam", tags=["#art"])
        assert affinity_of(store, "ana") == {"#art": 2}

    def test_unknown_author(self, seeded_store, cfg):
        before = seeded_store.get(POSTS)
        with pytest.raises(AuthError):
            _create(seeded_store, cfg, author_id="ghost")
        assert seeded_store.get(POSTS) == before

    def test_duplicate_tags_collapsed(self, store, cfg):
        add_user(store, "ana")
        post_id = _create(store, cfg, author_id="ana", tags=["#coding", "#coding", "#ai"])
        assert _post(store, post_id)["tags"] == ["#coding", "#ai"]
        assert affinity_of(store, "ana") == {"#coding": 2, "#ai": 2}

    def test_custom_emoji_kept(self, store, cfg):
        add_user(store, "ana")
        post_id = _create(store, cfg, author_id="ana", emoji="🎉")
        assert _post(store, post_id)["emoji"] == "🎉"


class TestExcerpt:
    def test_short_content_unchanged(self):
        assert ps.make_excerpt("  hello  ", 160) == "hello"

    def test_exact_limit_has_no_ellipsis(self):
        assert ps.make_excerpt("x" * 160, 160) == "x" * 160

    def test_long_content_truncated(self):
        assert ps.make_excerpt("x" * 161, 160) == "x" * 160 + "…"


# ---------------------------------------------------------------------------
# Reactions
# ---------------------------------------------------------------------------
class TestReactions:
    def test_like_is_idempotent_per_user(self, seeded_store):
        # post_1 is seeded with two likes, none from Priya
        assert ps.toggle_like(seeded_store, "post_1", "user_priya") == {"liked": True, "count": 3}
        assert _post(seeded_store, "post_1")["likes"].count("user_priya") == 1

        assert ps.toggle_like(seeded_store, "post_1", "user_priya") == {"liked": False, "count": 2}
        assert "user_priya" not in _post(seeded_store, "post_1")["likes"]

    def test_unlike_never_reverses_affinity(self, store, cfg):
        add_user(store, "ana")
        add_user(store, "ben")
        post_id = _create(store, cfg, author_id="ana", tags=["#music"])

        ps.toggle_like(store, post_id, "ben")
        ps.toggle_like(store, post_id, "ben")
        ps.toggle_like(store, post_id, "ben")

        assert affinity_of(store, "ben") == {"#music": 2}
        assert _post(store, post_id)["likes"] == ["ben"]

    def test_clap_has_no_affinity_effect(self, store, cfg):
        add_user(store, "ana")
        add_user(store, "ben")
        post_id = _create(store, cfg, author_id="ana", tags=["#music"])

        assert ps.toggle_clap(store, post_id, "ben") == {"clapped": True, "count": 1}
        assert affinity_of(store, "ben") == {}
        assert ps.toggle_clap(store, post_id, "ben") == {"clapped": False, "count": 0}

    def test_missing_post(self, seeded_store):
        with pytest.raises(NotFoundError):
            ps.toggle_like(seeded_store, "nope", "user_rahul")
        with pytest.raises(NotFoundError):
            ps.toggle_clap(seeded_store, "nope", "user_rahul")


# ---------------------------------------------------------------------------
# Flagging & moderation
# ---------------------------------------------------------------------------
class TestFlagPost:
    def test_approved_post_goes_under_review(self, seeded_store):
        record = ps.flag_post(seeded_store, "post_1", "user_arjun", "off-topic")

        assert _post(seeded_store, "post_1")["status"] == "under_review"
        assert record["reporter"] == "user_arjun"
        assert seeded_store.get(FLAGGED) == [record]
        assert "post_1" not in {p["id"] for p in ps.list_posts(seeded_store)}

    def test_pending_post_keeps_status(self, seeded_store, cfg):
        post_id = _create(seeded_store, cfg)
        ps.flag_post(seeded_store, post_id, "user_arjun", "duplicate")
        assert _post(seeded_store, post_id)["status"] == "pending_review"
        assert len(seeded_store.get(FLAGGED)) == 1

    def test_unknown_post_still_recorded(self, seeded_store):
        record = ps.flag_post(seeded_store, "ghost_post", "user_arjun", "spam")
        assert record["target_id"] == "ghost_post"
        assert len(seeded_store.get(FLAGGED)) == 1


class TestModeratePost:
    def test_requires_admin(self, seeded_store):
        with pytest.raises(AuthError):
            ps.moderate_post(seeded_store, "post_1", "rejected", "user_rahul")
        assert _post(seeded_store, "post_1")["status"] == "approved"

    def test_approve_pending_post(self, seeded_store, cfg):
        post_id = _create(seeded_store, cfg)
        post = ps.moderate_post(seeded_store, post_id, "approved", "user_admin")
        assert post["status"] == "approved"
        assert post_id in {p["id"] for p in ps.list_posts(seeded_store)}

    def test_rejected_post_can_be_approved_again(self, seeded_store):
        ps.moderate_post(seeded_store, "post_2", "rejected", "user_admin")
        ps.moderate_post(seeded_store, "post_2", "approved", "user_admin")
        assert _post(seeded_store, "post_2")["status"] == "approved"

    @pytest.mark.parametrize("status", ["pending_review", "archived"])
    def test_invalid_decision(self, seeded_store, status):
        with pytest.raises(ValidationError):
            ps.moderate_post(seeded_store, "post_1", status, "user_admin")

    def test_missing_post(self, seeded_store):
        with pytest.raises(NotFoundError):
            ps.moderate_post(seeded_store, "nope", "approved", "user_admin")

    def test_queue(self, seeded_store, cfg):
        assert ps.moderation_queue(seeded_store, "user_admin") == []

        pending = _create(seeded_store, cfg)
        flagged = _create(seeded_store, cfg, content="abuse")
        ps.flag_post(seeded_store, "post_3", "user_rahul", "wrong info")

        queued = {p["id"] for p in ps.moderation_queue(seeded_store, "user_admin")}
        assert queued == {pending, flagged, "post_3"}

    def test_queue_requires_admin(self, seeded_store):
        with pytest.raises(AuthError):
            ps.moderation_queue(seeded_store, "user_priya")


# ---------------------------------------------------------------------------
# list_posts
# ---------------------------------------------------------------------------
class TestListPosts:
    NOW = datetime(2025, 2, 18, 10, 0, tzinfo=UTC)

    def test_newest_first_with_counts(self, seeded_store):
        posts = ps.list_posts(seeded_store, now=self.NOW)
        assert [p["id"] for p in posts] == [f"post_{i}" for i in range(1, 7)]
        assert posts[0]["time_ago"] == "2h ago"
        assert posts[-1]["time_ago"] == "2d ago"
        for p in posts:
            assert p["like_count"] == len(p["likes"])
            assert p["clap_count"] == len(p["claps"])

    def test_limit(self, seeded_store):
        assert len(ps.list_posts(seeded_store, limit=2)) == 2

    def test_author_filter(self, seeded_store):
        posts = ps.list_posts(seeded_store, author_id="user_rahul")
        assert [p["id"] for p in posts] == ["post_4", "post_6"]

    def test_all_statuses(self, seeded_store, cfg):
        post_id = _create(seeded_store, cfg)
        everything = ps.list_posts(seeded_store, status="all")
        assert everything[0]["id"] == post_id
        assert len(everything) == 7

    def test_status_filter(self, seeded_store, cfg):
        post_id = _create(seeded_store, cfg)
        assert [p["id"] for p in ps.list_posts(seeded_store, status="pending_review")] == [post_id]
