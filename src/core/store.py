"""In-memory per-chat result store (core domain).

One ChatStore exists per chat. It is passed into every processor call
instead of living in module-level state. Sequences only ever grow.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from core.completion import SubmissionTracker
from core.models import ScoredResult


class ChatStore:
    """Append-only scored results of one chat, keyed by player."""

    def __init__(self, source_key: str, expected_members: int = 0) -> None:
        self.source_key = source_key
        self.submissions = SubmissionTracker(expected_members)
        self._by_player: Dict[str, List[ScoredResult]] = {}

    def append(self, result: ScoredResult) -> bool:
        """Store a result; return True when it completes its game."""

        self._by_player.setdefault(result.player, []).append(result)
        return self.submissions.record(result.game_number, result.player)

    def players(self) -> List[str]:
        return list(self._by_player)

    def results_for(self, player: str) -> Tuple[ScoredResult, ...]:
        return tuple(self._by_player.get(player, ()))

    def latest_game(self) -> Optional[int]:
        return self.submissions.latest_game()


class StoreRegistry:
    """Hands out one ChatStore per chat source key."""

    def __init__(self, expected_members: Optional[Dict[str, int]] = None) -> None:
        self._expected = dict(expected_members or {})
        self._stores: Dict[str, ChatStore] = {}

    def for_chat(self, source_key: str) -> ChatStore:
        store = self._stores.get(source_key)
        if store is None:
            store = ChatStore(source_key, self._expected.get(source_key, 0))
            self._stores[source_key] = store
        return store

    def set_expected(self, source_key: str, expected: int) -> None:
        self._expected[source_key] = expected
        self.for_chat(source_key).submissions.set_expected(expected)
