"""Textual dashboard: projects, duplicate groups and quick actions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Footer, Header, Input, Static, TabbedContent, TabPane

from orbit.dashboard.views import DashboardModel, ViewFilter
from orbit.errors import OrbitError

logger = logging.getLogger(__name__)


def _mtime_cell(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value is not None else "-"


class OrbitDashboard(App[None]):
    TITLE = "Orbit"
    AUTO_FOCUS = "#projects"
    CSS = """
    #status {
        height: 1;
        padding: 0 1;
        background: $boost;
    }
    #search {
        dock: bottom;
    }
    """
    BINDINGS = [
        Binding("r", "refresh_census", "Re-census"),
        Binding("a", "toggle_filter('active')", "Active"),
        Binding("f", "toggle_filter('focus')", "Focus"),
        Binding("b", "toggle_filter('backups')", "Backups"),
        Binding("t", "toggle_filter('artifacts')", "Artifacts"),
        Binding("slash", "search", "Search"),
        Binding("p", "toggle_pin", "Pin"),
        Binding("e", "export", "Export"),
        Binding("s", "snapshot", "Snapshot"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, model: DashboardModel) -> None:
        super().__init__()
        self.model = model

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="status")
        with TabbedContent():
            with TabPane("Projects", id="projects-tab"):
                yield DataTable(id="projects", cursor_type="row")
            with TabPane("Duplicates", id="duplicates-tab"):
                yield DataTable(id="duplicates", cursor_type="row")
        yield Input(
            value=self.model.query,
            placeholder="filter by path, enter to apply",
            id="search",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#projects", DataTable).add_columns(
            "", "Path", "Kind", "Last change", "Artifacts"
        )
        self.query_one("#duplicates", DataTable).add_columns(
            "Group", "", "Path", "Kind", "Last change"
        )
        self.refresh_views()

    def refresh_views(self) -> None:
        self.query_one("#status", Static).update(self.model.status_line())

        projects = self.query_one("#projects", DataTable)
        projects.clear()
        for item in self.model.projects():
            projects.add_row(
                "★" if item.pinned else "",
                item.path,
                item.kind.label,
                _mtime_cell(item.latest_mtime),
                str(item.artifact_count),
            )
        row = self.model.selected_row()
        if row is not None:
            projects.move_cursor(row=row)

        duplicates = self.query_one("#duplicates", DataTable)
        duplicates.clear()
        for fingerprint, members in self.model.duplicate_groups():
            for item in members:
                duplicates.add_row(
                    fingerprint[:12],
                    "★" if item.pinned else "",
                    item.path,
                    item.kind.label,
                    _mtime_cell(item.latest_mtime),
                )

    def _run(self, label: str, action: Callable[[], object]) -> None:
        try:
            result = action()
        except OrbitError as exc:
            self.notify(f"{label} failed: {exc}", severity="error")
            return
        if isinstance(result, Path):
            self.notify(f"{label}: {result}")
        self.refresh_views()

    def action_refresh_census(self) -> None:
        self._run("census", self.model.refresh_census)

    def action_toggle_filter(self, name: str) -> None:
        self.model.toggle_filter(ViewFilter(name))
        self.refresh_views()

    def action_search(self) -> None:
        self.query_one("#search", Input).focus()

    @on(DataTable.RowHighlighted, "#projects")
    def remember_selection(self, event: DataTable.RowHighlighted) -> None:
        rows = self.model.projects()
        if 0 <= event.cursor_row < len(rows):
            self.model.selection = rows[event.cursor_row].path

    @on(Input.Submitted, "#search")
    def apply_search(self, event: Input.Submitted) -> None:
        self.model.set_query(event.value)
        self.query_one("#projects", DataTable).focus()
        self.refresh_views()

    def action_toggle_pin(self) -> None:
        table = self.query_one("#projects", DataTable)
        rows = self.model.projects()
        if not rows or table.cursor_row < 0:
            return
        selected = rows[min(table.cursor_row, len(rows) - 1)].path
        self._run("pin", lambda: self.model.toggle_pin(selected))

    def action_export(self) -> None:
        self._run("export", self.model.export)

    def action_snapshot(self) -> None:
        self._run("snapshot", self.model.snapshot)

    async def action_quit(self) -> None:
        try:
            self.model.save_session()
        except OrbitError as exc:
            logger.warning("dashboard session not saved: %s", exc)
        self.exit()


def run_dashboard(model: DashboardModel) -> None:
    OrbitDashboard(model).run()
