"""Textual app that browses the outcome of a startup run."""

from __future__ import annotations

from typing import Optional

try:  # pragma: no cover - imported only when the inspector is run
    from textual.app import App, ComposeResult
    from textual.widgets import (
        DataTable,
        Footer,
        Header,
        Static,
        TabbedContent,
        TabPane,
    )
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use vim_init.adapters.textual.app"
    ) from exc

from vim_init.startup import StartupResult

from .inspector import InspectorModel, Section


class ConfigInspectorApp(App[None]):
    """One tab per section, with a status line summarising the run."""

    CSS = """
	Screen {
		layout: vertical;
	}

	DataTable {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("q", "quit", "Quit"),
        ("r", "refresh", "Refresh"),
    ]

    def __init__(self, result: StartupResult) -> None:
        super().__init__()
        self.model = InspectorModel(result, on_status=self._update_status)
        self._status_widget: Static | None = None
        self._tables: dict[str, DataTable] = {}

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with TabbedContent():
            for name in self.model.SECTIONS:
                section = self.model.section(name)
                with TabPane(section.title, id=f"tab-{name}"):
                    table: DataTable = DataTable(
                        id=f"table-{name}", zebra_stripes=True
                    )
                    self._tables[name] = table
                    yield table
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self._fill_tables()
        self._update_status(self.model.status_line())

    def action_refresh(self) -> None:
        self.model.refresh()
        self._fill_tables()

    def _fill_tables(self) -> None:
        for name, table in self._tables.items():
            self._fill(table, self.model.section(name))

    @staticmethod
    def _fill(table: DataTable, section: Section) -> None:
        table.clear(columns=True)
        table.add_columns(*section.columns)
        for row in section.rows:
            table.add_row(*row.cells, key=row.key or None)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def run_inspector(
    result: StartupResult, *, app: Optional[ConfigInspectorApp] = None
) -> None:
    (app or ConfigInspectorApp(result)).run()


__all__ = ["ConfigInspectorApp", "run_inspector"]
