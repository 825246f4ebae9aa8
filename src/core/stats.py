"""Per-player statistics aggregation (core domain)."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from core.models import ATTEMPT_LABELS, FAILED_LABEL, PlayerStats, ScoredLike


def empty_distribution() -> Dict[str, int]:
    return {label: 0 for label in ATTEMPT_LABELS}


def aggregate(results: Sequence[ScoredLike]) -> PlayerStats:
    """Fold a player's results into summary statistics.

    An empty sequence yields the zero-valued stats instead of failing. Failed
    games count towards the totals and averages (with only their bonus
    points) but never towards the attempts average, and land in the "X"
    bucket rather than "6".
    """

    distribution = empty_distribution()
    total_games = len(results)
    if total_games == 0:
        return PlayerStats(
            total_games=0,
            solved_games=0,
            solve_rate=0.0,
            average_attempts=0.0,
            total_score=0,
            average_score=0.0,
            distribution=distribution,
        )

    solved_attempts: List[int] = []
    total_score = 0
    for result in results:
        if result.solved:
            attempts = int(result.attempts_label)
            solved_attempts.append(attempts)
            distribution[str(attempts)] += 1
        else:
            distribution[FAILED_LABEL] += 1
        total_score += result.total_score

    solved_games = len(solved_attempts)
    return PlayerStats(
        total_games=total_games,
        solved_games=solved_games,
        solve_rate=solved_games / total_games * 100,
        average_attempts=sum(solved_attempts) / solved_games if solved_games else 0.0,
        total_score=total_score,
        average_score=total_score / total_games,
        distribution=distribution,
    )


def group_by_player(results: Iterable[ScoredLike]) -> Dict[str, List[ScoredLike]]:
    """Group results per player, keeping first-seen player order and arrival order."""

    grouped: Dict[str, List[ScoredLike]] = {}
    for result in results:
        grouped.setdefault(result.player, []).append(result)
    return grouped


def aggregate_by_player(results: Iterable[ScoredLike]) -> Dict[str, PlayerStats]:
    return {player: aggregate(items) for player, items in group_by_player(results).items()}
