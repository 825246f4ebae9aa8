from __future__ import annotations

from datetime import date, datetime, timezone

from adapters.sqlite_storage import SQLiteStorage
from core.models import MessageContext, ResultRecord


def _context(source_key: str, message_id: int) -> MessageContext:
    return MessageContext(
        source_key=source_key,
        chat_id=-100123,
        message_id=message_id,
        author_id="42",
        author_name="Ana",
        date=datetime(2024, 2, 20, 7, tzinfo=timezone.utc),
        text="",
    )


def _record(player: str, game: int, day: date, label: str = "3", bonus: int = 5) -> ResultRecord:
    base = {"3": 400, "X": 0}[label]
    return ResultRecord(
        date=day,
        game_number=game,
        player=player,
        attempts_label=label,
        solved=label != "X",
        base_score=base,
        bonus_points=bonus,
        total_score=base + bonus,
    )


def _storage(tmp_path) -> SQLiteStorage:
    storage = SQLiteStorage(str(tmp_path / "wordlescope.db"))
    storage.init_db()
    # Creating tables twice is harmless.
    storage.init_db()
    return storage


def test_last_id_roundtrip(tmp_path) -> None:
    storage = _storage(tmp_path)
    assert storage.get_last_id("@group") is None
    storage.set_last_id("@group", 10)
    storage.set_last_id("@group", 12)
    assert storage.get_last_id("@group") == 12
    assert storage.list_sources_state() == {"@group"}


def test_results_are_returned_in_submission_order(tmp_path) -> None:
    storage = _storage(tmp_path)
    first = _record("Bo", 1000, date(2024, 2, 14))
    second = _record("Ana", 1000, date(2024, 2, 14), label="X")
    third = _record("Ana", 1001, date(2024, 2, 16))
    storage.save_result(_context("@group", 1), first)
    storage.save_result(_context("@group", 2), second)
    storage.save_result(_context("@group", 3), third)
    storage.save_result(_context("@other", 4), _record("Cy", 1000, date(2024, 2, 14)))

    assert storage.daily_results("@group", 1000) == [first, second]
    assert storage.results_for_source("@group") == [first, second, third]
    assert storage.latest_game("@group") == 1001
    assert storage.latest_game("@missing") is None
    assert storage.list_result_sources() == ["@group", "@other"]


def test_results_between_is_inclusive(tmp_path) -> None:
    storage = _storage(tmp_path)
    for index, day in enumerate([date(2024, 2, 15), date(2024, 2, 16), date(2024, 2, 29), date(2024, 3, 1)]):
        storage.save_result(_context("@group", index), _record("Ana", 1000 + index, day))

    found = storage.results_between("@group", date(2024, 2, 16), date(2024, 2, 29))
    assert [record.date for record in found] == [date(2024, 2, 16), date(2024, 2, 29)]


def test_group_members_upsert(tmp_path) -> None:
    storage = _storage(tmp_path)
    assert storage.get_group_members("@group") == 0
    storage.set_group_members("@group", "Wordlers", 5)
    storage.set_group_members("@group", "Wordlers", 6)
    assert storage.get_group_members("@group") == 6
