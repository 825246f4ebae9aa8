"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for storage adapters so that the core can
be reused with different backends. The core depends on nothing but the flat
ResultRecord shape.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Protocol

from core.models import MessageContext, ResultRecord


class StoragePort(Protocol):
    """Storage operations required by the core pipeline."""

    def get_last_id(self, source_key: str) -> Optional[int]:
        ...

    def set_last_id(self, source_key: str, last_message_id: int) -> None:
        ...

    def save_result(self, context: MessageContext, record: ResultRecord) -> None:
        ...

    def daily_results(self, source_key: str, game_number: int) -> List[ResultRecord]:
        ...

    def results_for_source(self, source_key: str) -> List[ResultRecord]:
        ...

    def results_between(self, source_key: str, start: date, end: date) -> List[ResultRecord]:
        ...

    def latest_game(self, source_key: str) -> Optional[int]:
        ...

    def get_group_members(self, source_key: str) -> int:
        ...
