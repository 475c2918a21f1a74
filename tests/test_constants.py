"""
tests/test_constants.py — Id & Time Helpers
============================================
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from conftest import local_zone
from memorywall.constants import format_clock, new_id, parse_iso, relative_time

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    "iso, expected",
    [
        ("2025-03-10T11:59:30+00:00", "Just now"),
        ("2025-03-10T11:15:00+00:00", "45m ago"),
        ("2025-03-10T07:00:00+00:00", "5h ago"),
        ("2025-03-09T06:00:00+00:00", "Yesterday"),
        ("2025-03-06T12:00:00+00:00", "4d ago"),
    ],
)
def test_relative_time(iso, expected):
    assert relative_time(iso, NOW) == expected


def test_old_timestamps_show_local_date():
    # 20:00 UTC on 20 Feb is already 21 Feb at UTC+5:30
    with local_zone("UTC0"):
        assert relative_time("2025-02-20T20:00:00+00:00", NOW) == "20 Feb"
    with local_zone("IST-5:30"):
        assert relative_time("2025-02-20T20:00:00+00:00", NOW) == "21 Feb"


def test_clock_uses_local_zone():
    with local_zone("EST5"):
        assert format_clock("2025-02-20T10:00:00Z") == "05:00"


def test_naive_timestamps_are_utc():
    assert parse_iso("2025-02-20T10:00:00").tzinfo is UTC


def test_new_id_shape():
    ident = new_id()
    assert ident.startswith("id_")
    assert len(ident) == 12
    assert new_id() != ident
