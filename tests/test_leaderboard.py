from __future__ import annotations

from datetime import date

from core.leaderboard import rank_results, rank_standings
from core.models import PlayerStats, ResultRecord
from core.scoring import base_score
from core.stats import empty_distribution


def _record(player: str, label: str, bonus: int) -> ResultRecord:
    base = base_score(label)
    return ResultRecord(
        date=date(2024, 3, 1),
        game_number=1000,
        player=player,
        attempts_label=label,
        solved=label != "X",
        base_score=base,
        bonus_points=bonus,
        total_score=base + bonus,
    )


def _stats(total: int, solve_rate: float, average_attempts: float) -> PlayerStats:
    return PlayerStats(
        total_games=10,
        solved_games=int(solve_rate / 10),
        solve_rate=solve_rate,
        average_attempts=average_attempts,
        total_score=total,
        average_score=total / 10,
        distribution=empty_distribution(),
    )


def test_results_rank_by_total_score() -> None:
    records = [
        _record("low", "5", 10),
        _record("bonus", "4", 20),
        _record("fast", "3", 0),
        _record("failed", "X", 25),
    ]
    ranked = rank_results(records)
    assert [entry.rank for entry in ranked] == [1, 2, 3, 4]
    assert [entry.item.player for entry in ranked] == ["fast", "bonus", "low", "failed"]


def test_equal_total_prefers_higher_base() -> None:
    slow = ResultRecord(
        date=date(2024, 3, 1),
        game_number=1000,
        player="slow",
        attempts_label="5",
        solved=True,
        base_score=200,
        bonus_points=60,
        total_score=260,
    )
    quick = ResultRecord(
        date=date(2024, 3, 1),
        game_number=1000,
        player="quick",
        attempts_label="4",
        solved=True,
        base_score=250,
        bonus_points=10,
        total_score=260,
    )
    ranked = rank_results([slow, quick])
    assert [entry.item.player for entry in ranked] == ["quick", "slow"]


def test_full_ties_keep_input_order() -> None:
    records = [_record(name, "4", 7) for name in ("c", "a", "b")]
    ranked = rank_results(records)
    assert [entry.item.player for entry in ranked] == ["c", "a", "b"]
    assert [entry.rank for entry in ranked] == [1, 2, 3]


def test_empty_rankings() -> None:
    assert rank_results([]) == []
    assert rank_standings({}) == []


def test_standings_tie_breaks() -> None:
    stats = {
        "more-attempts": _stats(1000, 90.0, 4.5),
        "lower-rate": _stats(1000, 80.0, 3.0),
        "fewer-attempts": _stats(1000, 90.0, 3.5),
        "leader": _stats(1200, 50.0, 5.0),
    }
    ranked = rank_standings(stats)
    assert [entry.item.player for entry in ranked] == [
        "leader",
        "fewer-attempts",
        "more-attempts",
        "lower-rate",
    ]
    assert ranked[0].item.total_score == 1200
