"""Inventory data model: project entries and the persisted index document."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

INDEX_VERSION = "0.5"


class ProjectKind(StrEnum):
    ACTIVE_STANDALONE = "active_standalone"
    STANDALONE = "standalone"
    EXPERIMENTAL = "experimental"
    BACKUP_DUPLICATE = "backup_duplicate"
    # Reserved: no classification rule assigns these yet.
    VENDOR_THIRD_PARTY = "vendor_third_party"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return "".join(part.capitalize() for part in self.value.split("_"))

    @classmethod
    def parse(cls, raw: object) -> ProjectKind:
        try:
            return cls(str(raw))
        except ValueError:
            return cls.UNKNOWN


def _dt_to_json(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _dt_from_json(raw: object) -> datetime | None:
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def _opt_int(raw: object) -> int | None:
    if isinstance(raw, bool) or not isinstance(raw, int):
        return None
    return raw


def _flag(raw: object) -> bool:
    return raw if isinstance(raw, bool) else False


@dataclass(slots=True)
class ProjectEntry:
    path: str
    kind: ProjectKind
    # Derived from the focus list on every sync; never the source of truth.
    pinned: bool = False
    latest_mtime: datetime | None = None
    size_bytes: int | None = None
    artifact_count: int = 0
    has_git: bool = False
    has_rust: bool = False
    has_node: bool = False
    has_python: bool = False
    fingerprint: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "kind": self.kind.value,
            "pinned": self.pinned,
            "latest_mtime": _dt_to_json(self.latest_mtime),
            "size_bytes": self.size_bytes,
            "artifact_count": self.artifact_count,
            "has_git": self.has_git,
            "has_rust": self.has_rust,
            "has_node": self.has_node,
            "has_python": self.has_python,
            "fingerprint": self.fingerprint,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectEntry:
        fingerprint = data.get("fingerprint")
        return cls(
            path=str(data["path"]),
            kind=ProjectKind.parse(data.get("kind")),
            pinned=_flag(data.get("pinned")),
            latest_mtime=_dt_from_json(data.get("latest_mtime")),
            size_bytes=_opt_int(data.get("size_bytes")),
            artifact_count=_opt_int(data.get("artifact_count")) or 0,
            has_git=_flag(data.get("has_git")),
            has_rust=_flag(data.get("has_rust")),
            has_node=_flag(data.get("has_node")),
            has_python=_flag(data.get("has_python")),
            fingerprint=str(fingerprint) if fingerprint is not None else None,
        )


@dataclass(slots=True)
class OrbitIndex:
    version: str = INDEX_VERSION
    root: str = "."
    generated_at: datetime | None = None
    projects: list[ProjectEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "root": self.root,
            "generated_at": _dt_to_json(self.generated_at),
            "projects": [item.to_dict() for item in self.projects],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrbitIndex:
        raw_projects = data.get("projects") or []
        if not isinstance(raw_projects, list):
            raise ValueError("projects must be a list")
        for item in raw_projects:
            if not isinstance(item, dict):
                raise TypeError(f"project entries must be objects, got {type(item).__name__}")
        return cls(
            version=str(data.get("version", INDEX_VERSION)),
            root=str(data.get("root", ".")),
            generated_at=_dt_from_json(data.get("generated_at")),
            projects=[ProjectEntry.from_dict(item) for item in raw_projects],
        )


def is_pinned(path: str, pinned_paths: Iterable[str]) -> bool:
    return path in set(pinned_paths)


def sync_pinned_flags(projects: Iterable[ProjectEntry], pinned_paths: Iterable[str]) -> None:
    """Recompute every entry's ``pinned`` flag from the focus list."""
    pinned = set(pinned_paths)
    for project in projects:
        project.pinned = project.path in pinned
