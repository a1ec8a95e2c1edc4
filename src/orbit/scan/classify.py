"""Path- and activity-based project classification."""

from __future__ import annotations

from datetime import datetime

from orbit.model import ProjectKind

BACKUP_HINTS = ("backup", "copy", "old")
EXPERIMENT_HINTS = ("sandbox", "experiment", "try")


def classify_project(
    rel_path: str,
    latest: datetime | None,
    cutoff: datetime | None,
) -> ProjectKind:
    """Path rules first, then activity. Pure function of its arguments."""
    lowered = rel_path.lower()
    if any(hint in lowered for hint in BACKUP_HINTS):
        return ProjectKind.BACKUP_DUPLICATE
    if any(hint in lowered for hint in EXPERIMENT_HINTS):
        return ProjectKind.EXPERIMENTAL
    if latest is not None and (cutoff is None or latest >= cutoff):
        return ProjectKind.ACTIVE_STANDALONE
    return ProjectKind.STANDALONE
