"""
memorywall.engine.recommend — Affinity-Based Ranking
=====================================================

Pure calculation, no store I/O.  Given a user's tag-affinity map, rank
events and skills by how strongly their tags overlap the user's demonstrated
interests.

Event match percentages fall back to a random value in ``[10, 39]`` when
the computed percentage is zero, so cold-start users never see a wall of
0% matches.  Pass a seeded :class:`random.Random` as *rng* for
deterministic output.
"""

from __future__ import annotations

import math
import random
from collections.abc import Mapping, Sequence
from typing import Any

__all__ = [
    "COLD_START_PCT_RANGE",
    "recommend_events",
    "recommend_skills",
    "round_half_up",
    "tag_score",
]

COLD_START_PCT_RANGE: tuple[int, int] = (10, 39)
MAX_MATCH_PCT = 99
SKILL_LEVEL_SCALE = 120
SKILL_LEVEL_FLOOR = 10
SKILL_LEVEL_CEILING = 90


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 → 3, not 2)."""
    return int(math.floor(value + 0.5))


def tag_score(affinity: Mapping[str, int], tags: Sequence[str]) -> int:
    """Sum of the user's affinity over *tags*; unknown tags count zero."""
    return sum(affinity.get(tag, 0) for tag in tags)


def recommend_events(
    user_id: str,
    affinity: Mapping[str, int],
    events: Sequence[dict[str, Any]],
    *,
    rng: random.Random | None = None,
) -> list[dict[str, Any]]:
    """Rank events the user has not registered for.

    Each result is a copy of the event with ``score`` (raw affinity overlap)
    and ``match_pct`` added.  Sorted by ``score`` descending; ties keep the
    input order.
    """
    _rng = rng or random.Random()
    max_score = max([1, *affinity.values()])
    low, high = COLD_START_PCT_RANGE

    ranked: list[dict[str, Any]] = []
    for event in events:
        if user_id in event.get("registered", []):
            continue
        tags = event.get("tags", [])
        score = tag_score(affinity, tags)
        pct = 0
        if tags:
            pct = min(MAX_MATCH_PCT, round_half_up(100 * score / (max_score * len(tags))))
        if not pct:
            pct = _rng.randint(low, high)
        ranked.append({**event, "score": score, "match_pct": pct})

    ranked.sort(key=lambda e: e["score"], reverse=True)
    return ranked


def recommend_skills(
    affinity: Mapping[str, int],
    skills: Sequence[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Suggest skills whose tags the user has engaged with.

    ``level`` estimates proficiency as the skill's share of the user's total
    affinity, scaled and clamped to ``[10, 90]``.  ``suggested_via`` names
    the first tag that earned the suggestion.  Skills with zero score are
    dropped; the rest are sorted by ``score`` descending, ties stable.
    """
    total = max(1, sum(affinity.values()))

    ranked: list[dict[str, Any]] = []
    for skill in skills:
        tags = skill.get("tags", [])
        score = tag_score(affinity, tags)
        if score == 0:
            continue
        level = round_half_up(SKILL_LEVEL_SCALE * score / total)
        level = min(max(level, SKILL_LEVEL_FLOOR), SKILL_LEVEL_CEILING)
        via = next((t for t in tags if affinity.get(t)), tags[0] if tags else None)
        ranked.append({**skill, "score": score, "level": level, "suggested_via": via})

    ranked.sort(key=lambda s: s["score"], reverse=True)
    return ranked
