"""Dashboard session: filters, search query and selected project for one root."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from orbit.index import store

logger = logging.getLogger(__name__)

SESSION_FILE = "session.json"
SESSION_VERSION = 1


@dataclass(slots=True)
class DashboardSession:
    version: int = SESSION_VERSION
    root: str = ""
    # None keeps the dashboard defaults; an empty list means every filter is off.
    filters: list[str] | None = None
    query: str = ""
    selection: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "root": self.root,
            "filters": None if self.filters is None else list(self.filters),
            "query": self.query,
            "selection": self.selection,
        }


def session_path(root: Path) -> Path:
    return store.storage_dir(root) / SESSION_FILE


def session_root(root: Path) -> str:
    return str(root.absolute())


def load_session(root: Path) -> DashboardSession | None:
    """Return the saved session for *root*, or ``None`` when absent or unusable.

    A session recorded for a different root is ignored.
    """
    decoded = store.read_json_document(session_path(root))
    if decoded is None:
        return None

    raw_filters = decoded.get("filters")
    filters = (
        [item for item in raw_filters if isinstance(item, str)]
        if isinstance(raw_filters, list)
        else None
    )
    query = decoded.get("query")
    selection = decoded.get("selection")
    recorded_root = decoded.get("root")
    session = DashboardSession(
        root=recorded_root if isinstance(recorded_root, str) else "",
        filters=filters,
        query=query if isinstance(query, str) else "",
        selection=selection if isinstance(selection, str) else None,
    )
    if session.root and session.root != session_root(root):
        logger.info("ignoring session recorded for %s", session.root)
        return None
    return session


def save_session(root: Path, session: DashboardSession) -> Path:
    session.root = session_root(root)
    path = session_path(root)
    store.atomic_write(path, store.dump_json(session.to_dict()))
    return path
