from __future__ import annotations

import math

import pytest

from skill_sync.services.ranking import heat_score, sanitize_count


def test_heat_score_constants() -> None:
    assert heat_score(0, 1000) == pytest.approx(150)
    assert heat_score(1, 0) == 1000


def test_heat_score_increases_with_practices() -> None:
    for stars in (0, 10, 50_000):
        assert heat_score(1, stars) < heat_score(2, stars)


def test_one_practice_outranks_thousands_of_stars() -> None:
    assert heat_score(1, 0) > heat_score(0, 6_600)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, 0), (-3, 0), (math.nan, 0), (math.inf, 0), ("x", 0), (4, 4), (2.9, 2)],
)
def test_sanitize_count(value, expected) -> None:
    assert sanitize_count(value) == expected
