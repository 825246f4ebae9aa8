"""Standings tab: all-time leaderboard of the selected chat."""

from __future__ import annotations

from typing import Iterable

from textual.containers import Container, Vertical
from textual.widgets import DataTable, Static

from core.models import ResultRecord

from ..tables import standing_rows

STANDING_COLUMNS = ("rank", "player", "total", "games", "solve rate", "avg attempts", "avg score")


def fill_standings(table: DataTable, rows) -> None:
    table.clear()
    for row in rows:
        table.add_row(*row)


class StandingsTab(Container):
    def compose(self):
        with Vertical(id="standings-panel"):
            yield Static("All-time standings", classes="panel-title")
            yield DataTable(id="standings-table", cursor_type="row")

    def on_mount(self) -> None:
        table = self.query_one("#standings-table", DataTable)
        table.add_columns(*STANDING_COLUMNS)
        table.zebra_stripes = True
        table.styles.height = "1fr"

    def show(self, records: Iterable[ResultRecord]) -> None:
        fill_standings(self.query_one("#standings-table", DataTable), standing_rows(records))
