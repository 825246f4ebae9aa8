"""Main Textual app for the wordlescope results board."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Center, Container, Horizontal, Vertical
from textual.widgets import ContentSwitcher, Footer, Select, Static, Tab, Tabs

from adapters.sqlite_storage import SQLiteStorage

from .constants import TELEGRAM_BLUE, WORDLE_GREEN
from .tabs.results import ResultsTab
from .tabs.standings import StandingsTab
from .tabs.tournaments import TournamentsTab


class BoardApp(App):
    """Read-only board over the results database, one chat at a time."""

    CSS = """
    Screen {
        background: #0f1a21;
        color: #e8eef5;
    }

    #header {
        height: 6;
        padding: 1 4;
        border-bottom: solid #2a3a46;
    }

    #header-left, #header-right {
        width: 1fr;
    }

    #header-right {
        content-align: right top;
        text-align: right;
    }

    #title {
        text-style: bold;
    }

    .subtle {
        color: #c6d2dd;
    }

    #tabs-bar {
        height: 5;
        padding: 0 4;
        border-bottom: solid #2a3a46;
        align: center middle;
    }

    #tabs-center {
        width: 100%;
        height: 4;
        align: center middle;
    }

    #tabs {
        width: auto;
        min-width: 0;
    }

    Tab {
        height: 3;
        text-style: bold;
    }

    .panel-title {
        text-style: bold;
        padding: 1 0 0 0;
    }

    .actions {
        height: 3;
    }
    """

    BINDINGS = [
        ("r", "refresh", "Refresh"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, db_path: str, today: Optional[date] = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.storage = SQLiteStorage(db_path)
        self.db_path = db_path
        self._today = today
        self._source_key: Optional[str] = None

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static(f"db: {Path(self.db_path).name}", classes="subtle")
                with Vertical(id="header-right"):
                    yield Select([], prompt="Select a chat", id="source-select")
                    yield Static("", id="header-status", classes="subtle")

        with Container(id="tabs-bar"):
            with Center(id="tabs-center"):
                yield Tabs(
                    Tab("Results", id="results"),
                    Tab("Standings", id="standings"),
                    Tab("Tournaments", id="tournaments"),
                    id="tabs",
                )

        with ContentSwitcher(id="content"):
            yield ResultsTab(id="results")
            yield StandingsTab(id="standings")
            yield TournamentsTab(id="tournaments")
        yield Footer()

    def on_mount(self) -> None:
        self.storage.init_db()
        self.query_one("#content", ContentSwitcher).current = "results"
        self.action_refresh()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        tab_id = event.tab.id or ""
        if not tab_id:
            label = event.tab.label
            if hasattr(label, "plain"):
                label = label.plain
            tab_id = str(label).strip().lower()
        self.query_one("#content", ContentSwitcher).current = tab_id

    def on_select_changed(self, event: Select.Changed) -> None:
        if not isinstance(event.value, str):
            return
        self._source_key = event.value
        self._load_source()

    def action_refresh(self) -> None:
        sources = self.storage.list_result_sources()
        select = self.query_one("#source-select", Select)
        select.set_options((source_key, source_key) for source_key in sources)
        status = self.query_one("#header-status", Static)
        if not sources:
            status.update("no results stored yet")
            return
        status.update(f"{len(sources)} chats with results")
        if self._source_key not in sources:
            self._source_key = sources[0]
        select.value = self._source_key
        self._load_source()

    def _load_source(self) -> None:
        if not self._source_key:
            return
        records = self.storage.results_for_source(self._source_key)
        today = self._today or date.today()
        self.query_one(ResultsTab).show(self._source_key, records)
        self.query_one(StandingsTab).show(records)
        self.query_one(TournamentsTab).show(records, today)

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("WORDLE", WORDLE_GREEN),
            ("SCOPE", TELEGRAM_BLUE),
            (" > Results Board", "bold"),
        )
