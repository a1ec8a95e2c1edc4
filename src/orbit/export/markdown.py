"""Markdown census summary."""

from __future__ import annotations

from operator import attrgetter

from orbit.model import OrbitIndex, ProjectEntry, ProjectKind

MAX_LISTED_PROJECTS = 50


def most_recent_first(projects: list[ProjectEntry]) -> list[ProjectEntry]:
    dated = [item for item in projects if item.latest_mtime is not None]
    undated = [item for item in projects if item.latest_mtime is None]
    return sorted(dated, key=attrgetter("latest_mtime"), reverse=True) + undated


def render_markdown(index: OrbitIndex) -> str:
    lines = ["# Orbit Census Summary", ""]
    lines.append(f"- Root: `{index.root}`")
    if index.generated_at is not None:
        lines.append(f"- Generated: `{index.generated_at.isoformat()}`")
    lines.append(f"- Projects: `{len(index.projects)}`")
    lines.append("")

    kinds = [project.kind for project in index.projects]
    pinned = sum(1 for project in index.projects if project.pinned)
    lines.append("## Totals")
    lines.append(f"- Active: {kinds.count(ProjectKind.ACTIVE_STANDALONE)}")
    lines.append(f"- Backup/Duplicate: {kinds.count(ProjectKind.BACKUP_DUPLICATE)}")
    lines.append(f"- Pinned: {pinned}")
    lines.append("")

    lines.append("## Projects (most recent)")
    for project in most_recent_first(index.projects)[:MAX_LISTED_PROJECTS]:
        star = "★" if project.pinned else " "
        lines.append(f"- {star} {project.path} ({project.kind.label})")
    return "\n".join(lines) + "\n"
