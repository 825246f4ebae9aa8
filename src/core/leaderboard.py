"""Deterministic leaderboard ordering (core domain).

Both rankings rely on Python's sort being stable (also with reverse=True):
entries whose keys are fully equal keep their input order. Ranks are 1-based
and contiguous; ties never share a rank.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Mapping, Tuple, TypeVar

from core.models import PlayerStats, ScoredLike, Standing

T = TypeVar("T")


@dataclass(frozen=True)
class RankedEntry(Generic[T]):
    """An item with its position on a leaderboard."""

    rank: int
    item: T


def _rank(items: Iterable[T], key: Callable[[T], Tuple]) -> List[RankedEntry[T]]:
    ordered = sorted(items, key=key, reverse=True)
    return [RankedEntry(rank=index, item=item) for index, item in enumerate(ordered, start=1)]


def result_sort_key(result: ScoredLike) -> Tuple[int, int]:
    # Equal totals: fewer attempts (higher base) first.
    return result.total_score, result.base_score


def standing_sort_key(standing: Standing) -> Tuple[int, float, float]:
    stats = standing.stats
    return stats.total_score, stats.solve_rate, -stats.average_attempts


def rank_results(results: Iterable[ScoredLike]) -> List[RankedEntry[ScoredLike]]:
    """Rank game results by total score, then base score."""

    return _rank(results, result_sort_key)


def rank_standings(stats_by_player: Mapping[str, PlayerStats]) -> List[RankedEntry[Standing]]:
    """Rank player summaries by total score, then solve rate, then fewer attempts."""

    standings = [Standing(player=player, stats=stats) for player, stats in stats_by_player.items()]
    return _rank(standings, standing_sort_key)
