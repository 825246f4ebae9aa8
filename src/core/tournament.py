"""Half-month tournament periods (core domain).

A month holds two tournaments: days 1-15 (T1) and day 16 through the last
day of the month (T2). Periods are derived from dates and never stored.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Tuple

from core.leaderboard import RankedEntry, rank_standings
from core.models import ScoredLike, Standing, TournamentPeriod
from core.stats import aggregate_by_player

FIRST_HALF_LAST_DAY = 15

PERIOD_ID_RE = re.compile(r"^(\d{4})-(\d{2})-T([12])$")


@dataclass(frozen=True)
class TournamentSummary:
    """Outcome of a finished tournament."""

    period: TournamentPeriod
    winner: str
    winner_score: int
    participants: int


def format_period_id(year: int, month: int, half: int) -> str:
    return f"{year:04d}-{month:02d}-T{half}"


def _half_bounds(year: int, month: int, half: int) -> Tuple[date, date]:
    if half == 1:
        return date(year, month, 1), date(year, month, FIRST_HALF_LAST_DAY)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, FIRST_HALF_LAST_DAY + 1), date(year, month, last_day)


def period_for(day: date) -> TournamentPeriod:
    """Return the tournament period a calendar date belongs to."""

    half = 1 if day.day <= FIRST_HALF_LAST_DAY else 2
    start_date, end_date = _half_bounds(day.year, day.month, half)
    return TournamentPeriod(
        id=format_period_id(day.year, day.month, half),
        year=day.year,
        month=day.month,
        half=half,
        start_date=start_date,
        end_date=end_date,
    )


def parse_period_id(period_id: str) -> TournamentPeriod:
    """Parse a `YYYY-MM-T1|T2` identifier.

    Raises:
        ValueError: the identifier is malformed or names an invalid month.
    """

    match = PERIOD_ID_RE.match((period_id or "").strip().upper())
    if match is None:
        raise ValueError(f"Invalid tournament id: {period_id!r} (expected YYYY-MM-T1 or YYYY-MM-T2)")
    year, month, half = (int(part) for part in match.groups())
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid tournament month: {period_id!r}")
    return period_for(date(year, month, 1 if half == 1 else FIRST_HALF_LAST_DAY + 1))


def range_for(period_id: str) -> Tuple[date, date]:
    """Return the inclusive (start_date, end_date) of a tournament id."""

    period = parse_period_id(period_id)
    return period.start_date, period.end_date


def results_in_period(results: Iterable[ScoredLike], period: TournamentPeriod) -> List[ScoredLike]:
    return [result for result in results if period.contains(result.date)]


def tournament_standings(results: Iterable[ScoredLike], period_id: str) -> List[RankedEntry[Standing]]:
    """Aggregate and rank every player's results inside one tournament."""

    period = parse_period_id(period_id)
    return rank_standings(aggregate_by_player(results_in_period(results, period)))


def previous_tournaments(results: Iterable[ScoredLike], today: date, limit: int = 10) -> List[TournamentSummary]:
    """Summarize tournaments that ended before the one containing `today`.

    Newest first, at most `limit` entries.
    """

    current_id = period_for(today).id
    by_period: Dict[str, List[ScoredLike]] = {}
    for result in results:
        period_id = period_for(result.date).id
        if period_id >= current_id:
            continue
        by_period.setdefault(period_id, []).append(result)

    summaries: List[TournamentSummary] = []
    for period_id in sorted(by_period, reverse=True)[:limit]:
        ranked = rank_standings(aggregate_by_player(by_period[period_id]))
        winner = ranked[0].item
        summaries.append(
            TournamentSummary(
                period=parse_period_id(period_id),
                winner=winner.player,
                winner_score=winner.total_score,
                participants=len(ranked),
            )
        )
    return summaries
