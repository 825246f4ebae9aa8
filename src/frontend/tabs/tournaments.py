"""Tournaments tab: the running half-month and the finished ones."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from textual.containers import Container, Vertical
from textual.widgets import DataTable, Static

from core.models import ResultRecord

from ..tables import current_tournament_rows, previous_tournament_rows
from .standings import STANDING_COLUMNS, fill_standings

HISTORY_COLUMNS = ("tournament", "from", "to", "winner", "score", "players")


class TournamentsTab(Container):
    def compose(self):
        with Vertical(id="tournaments-panel"):
            yield Static("Current tournament", id="current-title", classes="panel-title")
            yield DataTable(id="current-table", cursor_type="row")
            yield Static("Previous tournaments", classes="panel-title")
            yield DataTable(id="history-table", cursor_type="row")

    def on_mount(self) -> None:
        current = self.query_one("#current-table", DataTable)
        current.add_columns(*STANDING_COLUMNS)
        history = self.query_one("#history-table", DataTable)
        history.add_columns(*HISTORY_COLUMNS)
        for table in (current, history):
            table.zebra_stripes = True
            table.styles.height = "1fr"

    def show(self, records: Sequence[ResultRecord], today: date) -> None:
        period_id, rows = current_tournament_rows(records, today)
        self.query_one("#current-title", Static).update(f"Current tournament {period_id}")
        fill_standings(self.query_one("#current-table", DataTable), rows)
        fill_standings(self.query_one("#history-table", DataTable), previous_tournament_rows(records, today))
