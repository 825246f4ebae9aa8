"""SQLite storage adapter.

Implements the core StoragePort using a simple SQLite database.
"""

from __future__ import annotations

import sqlite3
from datetime import date, datetime, timezone
from typing import List, Optional

from core.models import MessageContext, ResultRecord

_RESULT_COLUMNS = """
    date, game_number, player, attempts_label, solved,
    base_score, bonus_points, total_score
"""


class SQLiteStorage:
    """Thin SQLite wrapper that satisfies the StoragePort contract."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - sources_state: per-source last_message_id for idempotency
        - results: append-only log of scored results
        - group_members: last known member count per group
        """

        with self._connect() as conn:
            # sources_state keeps a single counter per source so we can safely
            # restart the app without scoring old messages twice.
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS sources_state (
                    source_key TEXT PRIMARY KEY,
                    last_message_id INTEGER NOT NULL
                )
                """
            )
            # results is append-only; rows are never updated or deleted.
            # Fields:
            # - date: submission day (YYYY-MM-DD) used for tournament ranges
            # - attempts_label: "1".."6" or "X"
            # - arrived_at: original message timestamp from Telegram
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS results (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    source_key TEXT NOT NULL,
                    chat_id INTEGER,
                    message_id INTEGER,
                    date TEXT NOT NULL,
                    game_number INTEGER NOT NULL,
                    player TEXT NOT NULL,
                    player_id TEXT,
                    attempts_label TEXT NOT NULL,
                    solved INTEGER NOT NULL,
                    base_score INTEGER NOT NULL,
                    bonus_points INTEGER NOT NULL,
                    total_score INTEGER NOT NULL,
                    arrived_at TIMESTAMP,
                    created_at TIMESTAMP
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_results_source_game ON results(source_key, game_number)"
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_results_source_date ON results(source_key, date)"
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS group_members (
                    source_key TEXT PRIMARY KEY,
                    group_name TEXT,
                    member_count INTEGER NOT NULL
                )
                """
            )

    def get_last_id(self, source_key: str) -> Optional[int]:
        """Return the last processed message_id for a source, if any."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT last_message_id FROM sources_state WHERE source_key = ?",
                (source_key,),
            ).fetchone()
        return int(row["last_message_id"]) if row else None

    def set_last_id(self, source_key: str, last_message_id: int) -> None:
        """Upsert the last processed message_id for a source."""

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO sources_state (source_key, last_message_id)
                VALUES (?, ?)
                ON CONFLICT(source_key) DO UPDATE SET last_message_id = excluded.last_message_id
                """,
                (source_key, last_message_id),
            )

    def list_sources_state(self) -> set[str]:
        """Return all source_key values currently tracked in sources_state."""

        with self._connect() as conn:
            rows = conn.execute("SELECT source_key FROM sources_state").fetchall()
        return {row["source_key"] for row in rows}

    def save_result(self, context: MessageContext, record: ResultRecord) -> None:
        """Append a scored result to the results table."""

        created_at = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO results (
                    source_key,
                    chat_id,
                    message_id,
                    date,
                    game_number,
                    player,
                    player_id,
                    attempts_label,
                    solved,
                    base_score,
                    bonus_points,
                    total_score,
                    arrived_at,
                    created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    context.source_key,
                    context.chat_id,
                    context.message_id,
                    record.date.isoformat(),
                    record.game_number,
                    record.player,
                    context.author_id,
                    record.attempts_label,
                    int(record.solved),
                    record.base_score,
                    record.bonus_points,
                    record.total_score,
                    context.date.isoformat(),
                    created_at.isoformat(),
                ),
            )

    @staticmethod
    def _to_record(row: sqlite3.Row) -> ResultRecord:
        return ResultRecord(
            date=date.fromisoformat(row["date"]),
            game_number=int(row["game_number"]),
            player=row["player"],
            attempts_label=row["attempts_label"],
            solved=bool(row["solved"]),
            base_score=int(row["base_score"]),
            bonus_points=int(row["bonus_points"]),
            total_score=int(row["total_score"]),
        )

    def _select(self, where: str, params: tuple) -> List[ResultRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_RESULT_COLUMNS} FROM results WHERE {where} ORDER BY id",
                params,
            ).fetchall()
        return [self._to_record(row) for row in rows]

    def daily_results(self, source_key: str, game_number: int) -> List[ResultRecord]:
        """Return every result for one game, in submission order."""

        return self._select("source_key = ? AND game_number = ?", (source_key, game_number))

    def results_for_source(self, source_key: str) -> List[ResultRecord]:
        return self._select("source_key = ?", (source_key,))

    def results_between(self, source_key: str, start: date, end: date) -> List[ResultRecord]:
        """Return results whose submission day lies in [start, end]."""

        # ISO dates compare correctly as text.
        return self._select(
            "source_key = ? AND date >= ? AND date <= ?",
            (source_key, start.isoformat(), end.isoformat()),
        )

    def latest_game(self, source_key: str) -> Optional[int]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT MAX(game_number) AS game FROM results WHERE source_key = ?",
                (source_key,),
            ).fetchone()
        return int(row["game"]) if row and row["game"] is not None else None

    def list_result_sources(self) -> List[str]:
        """Return every source_key that has at least one stored result."""

        with self._connect() as conn:
            rows = conn.execute("SELECT DISTINCT source_key FROM results ORDER BY source_key").fetchall()
        return [row["source_key"] for row in rows]

    def set_group_members(self, source_key: str, group_name: str, member_count: int) -> None:
        """Upsert the member count of a group."""

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO group_members (source_key, group_name, member_count)
                VALUES (?, ?, ?)
                ON CONFLICT(source_key) DO UPDATE SET
                    group_name = excluded.group_name,
                    member_count = excluded.member_count
                """,
                (source_key, group_name, member_count),
            )

    def get_group_members(self, source_key: str) -> int:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT member_count FROM group_members WHERE source_key = ?",
                (source_key,),
            ).fetchone()
        return int(row["member_count"]) if row else 0
