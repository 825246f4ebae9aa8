from __future__ import annotations

import random

import pytest

from core.models import ATTEMPT_LABELS
from core.parser import parse_result
from core.recognizer import DARK, GREEN, GRID_SYMBOLS, YELLOW
from core.scoring import BASE_SCORES, base_score, bonus_points, score

G, Y, D = GREEN, YELLOW, DARK


def test_sample_scores_321() -> None:
    text = "\n".join(
        [
            "Wordle 1,234 4/6",
            D + Y + D + D + D,
            D + D + G + Y + D,
            Y + G + G + D + G,
            G * 5,
        ]
    )
    parsed = parse_result(text)
    result = score(parsed.attempts_label, parsed.grid)
    assert result.base_score == 300
    assert result.bonus_points == 21
    assert result.total_score == 321


def test_base_scores_are_monotonic() -> None:
    values = [base_score(label) for label in ATTEMPT_LABELS]
    assert values == [600, 500, 400, 300, 200, 100, 0]
    for better, worse in zip(values, values[1:]):
        assert better - worse == 100


def test_unknown_or_missing_label_scores_zero() -> None:
    assert base_score(None) == 0
    assert base_score("") == 0
    assert base_score("7") == 0
    assert base_score("x") == BASE_SCORES["X"] == 0


def test_failed_game_keeps_only_bonus() -> None:
    grid = [(G, Y, D, D, D)] * 6
    result = score("X", grid)
    assert result.base_score == 0
    assert result.total_score == result.bonus_points == 18


def test_bonus_never_bridges_a_tier() -> None:
    full = [(G,) * 5] * 6
    assert bonus_points(full) == 60
    assert bonus_points([]) == 0
    # The best possible 6/6 never beats the worst possible 5/6.
    assert score("6", full).total_score < score("5", [(D,) * 5]).total_score


@pytest.mark.parametrize("seed", range(20))
def test_bonus_is_bounded_by_row_count(seed: int) -> None:
    rng = random.Random(seed)
    rows = rng.randint(1, 6)
    grid = [tuple(rng.choice(sorted(GRID_SYMBOLS)) for _ in range(5)) for _ in range(rows)]
    bonus = bonus_points(grid)
    assert 0 <= bonus <= 10 * rows
    assert score("6", grid).total_score < score("5", [(DARK,) * 5]).total_score
