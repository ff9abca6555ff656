"""Heat score — ranks skills by linked practices first, stars second."""

from __future__ import annotations

import math

# One linked practice outweighs roughly 6,667 stars.
PRACTICE_WEIGHT = 1000
STAR_WEIGHT = 0.15


def heat_score(practice_count: float, star_count: float) -> float:
    return practice_count * PRACTICE_WEIGHT + star_count * STAR_WEIGHT


def sanitize_count(value: float | int | None) -> int:
    """Clamp missing, negative or non-finite counts to zero."""
    if value is None:
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)
