"""Workspace artifact detection (handoff notes, plans, session logs)."""

from pathlib import PurePath

ARTIFACT_KEYWORDS = (
    "handoff",
    "agent",
    "claude",
    "export",
    "plan",
    "roadmap",
    "decision",
    "prompt",
    "session",
    "conversation",
    "summary",
)

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})


def is_artifact_name(path: PurePath | str) -> bool:
    name = PurePath(path).name.lower()
    return any(keyword in name for keyword in ARTIFACT_KEYWORDS)


def is_markdown_artifact(path: PurePath | str) -> bool:
    candidate = PurePath(path)
    return candidate.suffix.lower() in MARKDOWN_SUFFIXES and is_artifact_name(candidate)
