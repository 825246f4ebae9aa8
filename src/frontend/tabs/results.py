"""Results tab for browsing and exporting scored submissions."""

from __future__ import annotations

import csv
import json
from datetime import datetime
from typing import Any, Sequence

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Static

from core.models import ResultRecord

from ..constants import EXPORTS_DIR
from ..tables import export_rows, result_rows

COLUMNS = (
    ("date", 12),
    ("game", 7),
    ("rank", 6),
    ("player", 24),
    ("attempts", 9),
    ("base", 6),
    ("bonus", 6),
    ("total", 6),
)


class ResultsTab(Container):
    """Every stored result of the selected chat, newest game first."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._records: list[ResultRecord] = []
        self._source_key = ""

    def compose(self):
        with Vertical(id="results-panel"):
            yield Static("Results", classes="panel-title")
            yield DataTable(id="results-table", cursor_type="row")
            with Horizontal(id="results-actions", classes="actions"):
                yield Button("Export JSON", id="export-json", variant="success")
                yield Button("Export CSV", id="export-csv")
            yield Static("", id="results-output")

    def on_mount(self) -> None:
        table = self.query_one("#results-table", DataTable)
        for name, width in COLUMNS:
            table.add_column(name, key=name, width=width)
        table.zebra_stripes = True
        table.styles.height = "1fr"

    def show(self, source_key: str, records: Sequence[ResultRecord]) -> None:
        self._source_key = source_key
        self._records = list(records)
        table = self.query_one("#results-table", DataTable)
        table.clear()
        for row in result_rows(self._records):
            table.add_row(*row)
        self._set_output(f"loaded {len(self._records)} results for {source_key}")

    @on(Button.Pressed, "#export-json")
    def _on_export_json(self) -> None:
        self._export("json")

    @on(Button.Pressed, "#export-csv")
    def _on_export_csv(self) -> None:
        self._export("csv")

    def _export(self, fmt: str) -> None:
        rows = export_rows(self._records)
        if not rows:
            self._set_output("No results to export.")
            return
        EXPORTS_DIR.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        path = EXPORTS_DIR / f"results-{timestamp}.{fmt}"
        try:
            if fmt == "json":
                path.write_text(json.dumps(rows, indent=2, ensure_ascii=False), encoding="utf-8")
            else:
                with path.open("w", encoding="utf-8", newline="") as handle:
                    writer = csv.DictWriter(handle, fieldnames=list(rows[0].keys()))
                    writer.writeheader()
                    writer.writerows(rows)
            self._set_output(f"exported {len(rows)} results to {path}")
        except OSError as exc:
            self._set_output(f"export failed: {exc.strerror or exc}")

    def _set_output(self, message: str) -> None:
        self.query_one("#results-output", Static).update(message)
