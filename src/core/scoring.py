"""Score computation (core domain).

The base score depends only on the attempt count; the grid bonus is a
tie-breaker. Six rows of five greens are worth 60 points, below the
100-point gap between adjacent tiers, so fewer attempts always win.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from core.models import Score
from core.recognizer import GREEN, YELLOW

BASE_SCORES = {
    "1": 600,
    "2": 500,
    "3": 400,
    "4": 300,
    "5": 200,
    "6": 100,
    "X": 0,
}

SYMBOL_POINTS = {
    GREEN: 2,
    YELLOW: 1,
}


def base_score(attempts_label: Optional[str]) -> int:
    if not attempts_label:
        return 0
    return BASE_SCORES.get(str(attempts_label).upper(), 0)


def bonus_points(grid: Iterable[Sequence[str]]) -> int:
    return sum(SYMBOL_POINTS.get(symbol, 0) for row in grid for symbol in row)


def score(attempts_label: Optional[str], grid: Iterable[Sequence[str]]) -> Score:
    """Return the score for an attempts label and its emoji grid."""

    return Score(base_score=base_score(attempts_label), bonus_points=bonus_points(grid))
