"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types. All of them are frozen: a result
is never mutated once it has been parsed and scored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as Date
from datetime import datetime
from typing import Mapping, Optional, Protocol, Tuple

ATTEMPT_LABELS = ("1", "2", "3", "4", "5", "6", "X")
FAILED_LABEL = "X"
GRID_WIDTH = 5
MAX_GRID_ROWS = 6

GridRow = Tuple[str, ...]


@dataclass(frozen=True)
class MessageContext:
    """Minimal message context used by the core processing pipeline."""

    source_key: str
    chat_id: int
    message_id: int
    author_id: str
    author_name: str
    date: datetime
    text: str
    is_group: bool = True


@dataclass(frozen=True)
class ParsedResult:
    """Structured content of one recognized result message."""

    game_number: int
    attempts_label: str
    solved: bool
    grid: Tuple[GridRow, ...]

    def __post_init__(self) -> None:
        if self.game_number <= 0:
            raise ValueError(f"game_number must be positive, got {self.game_number}")
        if self.attempts_label not in ATTEMPT_LABELS:
            raise ValueError(f"Unsupported attempts label: {self.attempts_label!r}")
        if self.solved != (self.attempts_label != FAILED_LABEL):
            raise ValueError("solved must be False exactly when attempts_label is 'X'")
        if not 1 <= len(self.grid) <= MAX_GRID_ROWS:
            raise ValueError(f"grid must hold 1 to {MAX_GRID_ROWS} rows")
        if any(len(row) != GRID_WIDTH for row in self.grid):
            raise ValueError(f"every grid row must hold {GRID_WIDTH} symbols")

    @property
    def attempts(self) -> int:
        # Sort value only; statistics keep unsolved games in their own bucket.
        return int(self.attempts_label) if self.solved else MAX_GRID_ROWS


@dataclass(frozen=True)
class Score:
    """Base score from the attempt count plus the grid tie-break bonus."""

    base_score: int
    bonus_points: int

    @property
    def total_score(self) -> int:
        return self.base_score + self.bonus_points


class ScoredLike(Protocol):
    """Anything the aggregator and leaderboard can consume."""

    player: str
    date: Date

    @property
    def attempts_label(self) -> str:
        ...

    @property
    def solved(self) -> bool:
        ...

    @property
    def base_score(self) -> int:
        ...

    @property
    def total_score(self) -> int:
        ...


@dataclass(frozen=True)
class ResultRecord:
    """Flat persisted representation of one scored result."""

    date: Date
    game_number: int
    player: str
    attempts_label: str
    solved: bool
    base_score: int
    bonus_points: int
    total_score: int

    @property
    def attempts(self) -> int:
        return int(self.attempts_label) if self.solved else MAX_GRID_ROWS


@dataclass(frozen=True)
class ScoredResult:
    """A parsed and scored result attributed to a player and a day."""

    player: str
    player_id: str
    date: Date
    arrived_at: datetime
    result: ParsedResult
    score: Score

    def __post_init__(self) -> None:
        if not self.player or not self.player.strip():
            raise ValueError("player is required")
        if isinstance(self.date, datetime) or not isinstance(self.date, Date):
            raise ValueError("date must be a calendar date")
        if self.score.base_score < 0 or self.score.bonus_points < 0:
            raise ValueError("score components must be non-negative")

    @property
    def game_number(self) -> int:
        return self.result.game_number

    @property
    def attempts_label(self) -> str:
        return self.result.attempts_label

    @property
    def attempts(self) -> int:
        return self.result.attempts

    @property
    def solved(self) -> bool:
        return self.result.solved

    @property
    def base_score(self) -> int:
        return self.score.base_score

    @property
    def bonus_points(self) -> int:
        return self.score.bonus_points

    @property
    def total_score(self) -> int:
        return self.score.total_score

    def to_record(self) -> ResultRecord:
        """Return the flat record handed to the storage port."""

        return ResultRecord(
            date=self.date,
            game_number=self.game_number,
            player=self.player,
            attempts_label=self.attempts_label,
            solved=self.solved,
            base_score=self.base_score,
            bonus_points=self.bonus_points,
            total_score=self.total_score,
        )


@dataclass(frozen=True)
class PlayerStats:
    """Summary statistics for one player's results."""

    total_games: int
    solved_games: int
    solve_rate: float
    average_attempts: float
    total_score: int
    average_score: float
    distribution: Mapping[str, int]


@dataclass(frozen=True)
class Standing:
    """A player's aggregated stats, as ranked on summary leaderboards."""

    player: str
    stats: PlayerStats

    @property
    def total_score(self) -> int:
        return self.stats.total_score


@dataclass(frozen=True)
class TournamentPeriod:
    """Half-month scoring window."""

    id: str
    year: int
    month: int
    half: int
    start_date: Date
    end_date: Date

    def contains(self, day: Date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class Directive:
    """What the transport should do in response to one message."""

    reaction: Optional[str] = None
    reply_text: Optional[str] = None
    followups: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def silent(cls) -> "Directive":
        return cls()

    @property
    def is_silent(self) -> bool:
        return self.reaction is None and self.reply_text is None and not self.followups
