"""Submission completion tracking (core domain)."""

from __future__ import annotations

from typing import Dict, Optional, Set


class SubmissionTracker:
    """Counted set of distinct submitters per game.

    A game is complete once the number of distinct submitters reaches the
    expected group size. An expected size of 0 means the size is unknown and
    no game ever completes.
    """

    def __init__(self, expected: int = 0) -> None:
        self._expected = max(0, int(expected))
        self._submitters: Dict[int, Set[str]] = {}
        self._completed: Set[int] = set()

    @property
    def expected(self) -> int:
        return self._expected

    def set_expected(self, expected: int) -> None:
        self._expected = max(0, int(expected))

    def record(self, game_number: int, player: str) -> bool:
        """Add a submitter; return True only when this call completes the game."""

        submitters = self._submitters.setdefault(game_number, set())
        submitters.add(player)
        if game_number in self._completed or not self.is_complete(game_number):
            return False
        self._completed.add(game_number)
        return True

    def count(self, game_number: int) -> int:
        return len(self._submitters.get(game_number, ()))

    def is_complete(self, game_number: int) -> bool:
        return self._expected > 0 and self.count(game_number) >= self._expected

    def latest_game(self) -> Optional[int]:
        return max(self._submitters) if self._submitters else None
