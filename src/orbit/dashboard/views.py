"""Read-only dashboard projection of the index and focus list.

Derived views are memoized per ``generation``; ``reload()`` bumps the
generation after any change to the index or the focus list, which is the
only invalidation signal.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Any

from orbit.export.bundle import export_all
from orbit.export.markdown import most_recent_first
from orbit.index import store
from orbit.index.focus import Focus, load_focus, toggle_pin
from orbit.index.session import DashboardSession, load_session, save_session
from orbit.model import OrbitIndex, ProjectEntry, ProjectKind, sync_pinned_flags
from orbit.scan.census import CensusOptions, run_census
from orbit.scan.duplicates import group_by_fingerprint
from orbit.snapshot import snapshot_pinned

logger = logging.getLogger(__name__)

MAX_QUERY_LENGTH = 120


class ViewFilter(StrEnum):
    ACTIVE = "active"
    FOCUS = "focus"
    BACKUPS = "backups"
    ARTIFACTS = "artifacts"


DEFAULT_FILTERS = frozenset({ViewFilter.ACTIVE, ViewFilter.FOCUS, ViewFilter.ARTIFACTS})

DuplicateGroup = tuple[str, list[ProjectEntry]]


def _passes(project: ProjectEntry, filters: frozenset[ViewFilter]) -> bool:
    if ViewFilter.FOCUS in filters and project.pinned:
        return True
    if ViewFilter.ACTIVE in filters and project.kind is ProjectKind.ACTIVE_STANDALONE:
        return True
    if ViewFilter.BACKUPS in filters and project.kind is ProjectKind.BACKUP_DUPLICATE:
        return True
    return ViewFilter.ARTIFACTS in filters and project.artifact_count > 0


def _newest(members: list[ProjectEntry]) -> datetime | None:
    stamps = [item.latest_mtime for item in members if item.latest_mtime is not None]
    return max(stamps) if stamps else None


class DashboardModel:
    def __init__(
        self,
        root: Path,
        *,
        depth: int = 4,
        census_options: CensusOptions | None = None,
    ) -> None:
        self.root = root
        self.depth = depth
        self.census_options = census_options or CensusOptions()
        self.filters: frozenset[ViewFilter] = DEFAULT_FILTERS
        self.query = ""
        self.selection: str | None = None
        self.generation = 0
        self.index = OrbitIndex()
        self.focus = Focus()
        self._memo: dict[tuple[Any, ...], Any] = {}
        self.restore_session()
        self.reload()

    def restore_session(self) -> None:
        session = load_session(self.root)
        if session is None:
            return
        if session.filters is not None:
            known = {item.value for item in ViewFilter}
            self.filters = frozenset(ViewFilter(name) for name in session.filters if name in known)
        self.set_query(session.query)
        self.selection = session.selection

    def save_session(self) -> Path | None:
        """Persist filters, query and selection; skipped in dry-run mode."""
        if self.census_options.dry_run:
            return None
        session = DashboardSession(
            filters=sorted(self.filters),
            query=self.query,
            selection=self.selection,
        )
        return save_session(self.root, session)

    def reload(self) -> None:
        self.index = store.load(self.root)
        self.focus = load_focus(self.root)
        sync_pinned_flags(self.index.projects, self.focus.pinned)
        self.generation += 1
        self._memo.clear()

    def _memoized(self, key: tuple[Any, ...], compute: Callable[[], Any]) -> Any:
        full_key = (self.generation, *key)
        if full_key not in self._memo:
            self._memo[full_key] = compute()
        return self._memo[full_key]

    def projects(self) -> list[ProjectEntry]:
        filters, query = self.filters, self.query.strip().lower()

        def compute() -> list[ProjectEntry]:
            selected = [item for item in self.index.projects if _passes(item, filters)]
            if query:
                selected = [item for item in selected if query in item.path.lower()]
            return most_recent_first(selected)

        return self._memoized(("projects", filters, query), compute)

    def duplicate_groups(self) -> list[DuplicateGroup]:
        def compute() -> list[DuplicateGroup]:
            groups = [
                (fp, most_recent_first(members))
                for fp, members in group_by_fingerprint(self.index.projects).items()
            ]
            dated: list[tuple[datetime, DuplicateGroup]] = []
            undated: list[DuplicateGroup] = []
            for group in groups:
                newest = _newest(group[1])
                if newest is None:
                    undated.append(group)
                else:
                    dated.append((newest, group))
            dated.sort(key=lambda pair: pair[0], reverse=True)
            return [group for _, group in dated] + undated

        return self._memoized(("duplicates",), compute)

    def selected_row(self) -> int | None:
        """Row of the remembered selection in the current project view."""
        for row, item in enumerate(self.projects()):
            if item.path == self.selection:
                return row
        return None

    def toggle_filter(self, view_filter: ViewFilter) -> None:
        self.filters = self.filters ^ {view_filter}

    def set_query(self, query: str) -> None:
        self.query = query[:MAX_QUERY_LENGTH]

    def status_line(self) -> str:
        kinds = [item.kind for item in self.index.projects]
        return (
            f"{len(kinds)} projects | "
            f"{kinds.count(ProjectKind.ACTIVE_STANDALONE)} active | "
            f"{kinds.count(ProjectKind.BACKUP_DUPLICATE)} backup/dup | "
            f"{len(self.focus.pinned)} pinned | "
            f"filters: {', '.join(sorted(self.filters)) or 'none'}"
        )

    def refresh_census(self) -> None:
        """Run a full census inline, then reload the committed state."""
        run_census(self.root, self.depth, options=self.census_options)
        self.reload()

    def toggle_pin(self, rel_path: str) -> None:
        toggle_pin(self.root, rel_path)
        self.reload()

    def export(self) -> Path:
        return export_all(self.root, dry_run=self.census_options.dry_run)

    def snapshot(self, label: str = "tui") -> Path:
        return snapshot_pinned(self.root, label, dry_run=self.census_options.dry_run)
