from __future__ import annotations

from datetime import date

from core.models import ResultRecord
from core.scoring import base_score
from frontend.tables import (
    current_tournament_rows,
    export_rows,
    previous_tournament_rows,
    result_rows,
    standing_rows,
)


def _record(player: str, game: int, day: date, label: str, bonus: int = 4) -> ResultRecord:
    base = base_score(label)
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


RECORDS = [
    _record("Ana", 1000, date(2024, 3, 2), "4"),
    _record("Bo", 1000, date(2024, 3, 2), "2"),
    _record("Ana", 1018, date(2024, 3, 20), "X"),
]


def test_result_rows_newest_game_first_and_ranked() -> None:
    rows = result_rows(RECORDS)
    assert [row[1] for row in rows] == ["1018", "1000", "1000"]
    assert rows[1][2:4] == ("🥇", "Bo")
    assert rows[2][2:4] == ("🥈", "Ana")
    assert rows[0][4] == "X/6"


def test_standing_rows() -> None:
    rows = standing_rows(RECORDS)
    assert [row[1] for row in rows] == ["Bo", "Ana"]
    assert rows[1] == ("🥈", "Ana", "308", "2", "50.0%", "4.00", "154.0")


def test_tournament_rows() -> None:
    period_id, rows = current_tournament_rows(RECORDS, date(2024, 3, 25))
    assert period_id == "2024-03-T2"
    assert [row[1] for row in rows] == ["Ana"]

    history = previous_tournament_rows(RECORDS, date(2024, 3, 25))
    assert history == [("2024-03-T1", "2024-03-01", "2024-03-15", "Bo", "504", "2")]


def test_export_rows_are_flat() -> None:
    exported = export_rows(RECORDS[:1])
    assert exported == [
        {
            "date": "2024-03-02",
            "game_number": 1000,
            "player": "Ana",
            "attempts_label": "4",
            "solved": True,
            "base_score": 300,
            "bonus_points": 4,
            "total_score": 304,
        }
    ]
