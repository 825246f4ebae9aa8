"""Row builders for the board tables.

Kept free of Textual so the board's content can be checked without a
running terminal app.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Any, Iterable, List, Sequence, Tuple

from core.leaderboard import RankedEntry, rank_results, rank_standings
from core.models import ResultRecord, Standing
from core.rendering import medal
from core.stats import aggregate_by_player
from core.tournament import period_for, previous_tournaments, tournament_standings

Row = Tuple[str, ...]


def result_rows(records: Sequence[ResultRecord]) -> List[Row]:
    """Newest game first; within a game, ranked like the daily leaderboard."""

    by_game: dict[int, List[ResultRecord]] = {}
    for record in records:
        by_game.setdefault(record.game_number, []).append(record)

    rows: List[Row] = []
    for game in sorted(by_game, reverse=True):
        for entry in rank_results(by_game[game]):
            record = entry.item
            rows.append(
                (
                    record.date.isoformat(),
                    str(game),
                    medal(entry.rank),
                    record.player,
                    f"{record.attempts_label}/6",
                    str(record.base_score),
                    str(record.bonus_points),
                    str(record.total_score),
                )
            )
    return rows


def _standing_row(entry: RankedEntry[Standing]) -> Row:
    stats = entry.item.stats
    return (
        medal(entry.rank),
        entry.item.player,
        str(stats.total_score),
        str(stats.total_games),
        f"{stats.solve_rate:.1f}%",
        f"{stats.average_attempts:.2f}",
        f"{stats.average_score:.1f}",
    )


def standing_rows(records: Iterable[ResultRecord]) -> List[Row]:
    return [_standing_row(entry) for entry in rank_standings(aggregate_by_player(records))]


def current_tournament_rows(records: Iterable[ResultRecord], today: date) -> Tuple[str, List[Row]]:
    """Return the running tournament id and its standings rows."""

    period = period_for(today)
    ranked = tournament_standings(records, period.id)
    return period.id, [_standing_row(entry) for entry in ranked]


def previous_tournament_rows(records: Iterable[ResultRecord], today: date) -> List[Row]:
    return [
        (
            summary.period.id,
            summary.period.start_date.isoformat(),
            summary.period.end_date.isoformat(),
            summary.winner,
            str(summary.winner_score),
            str(summary.participants),
        )
        for summary in previous_tournaments(records, today)
    ]


def export_rows(records: Iterable[ResultRecord]) -> List[dict[str, Any]]:
    """Flatten records into JSON/CSV friendly dicts."""

    rows = []
    for record in records:
        row = asdict(record)
        row["date"] = record.date.isoformat()
        rows.append(row)
    return rows
