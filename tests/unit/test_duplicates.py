from orbit.model import ProjectEntry, ProjectKind
from orbit.scan.duplicates import group_by_fingerprint, mark_duplicates_by_fingerprint


def _entry(path: str, fp: str | None, kind=ProjectKind.STANDALONE, pinned=False) -> ProjectEntry:
    return ProjectEntry(path=path, kind=kind, pinned=pinned, fingerprint=fp)


def test_duplicates_are_demoted_unless_pinned_or_experimental() -> None:
    projects = [
        _entry("a", "fp"),
        _entry("b", "fp", kind=ProjectKind.ACTIVE_STANDALONE),
        _entry("c", "fp", pinned=True),
        _entry("d", "fp", kind=ProjectKind.EXPERIMENTAL),
        _entry("e", "other"),
        _entry("f", None),
        _entry("g", None),
    ]

    changed = mark_duplicates_by_fingerprint(projects)

    kinds = {item.path: item.kind for item in projects}
    assert changed == 2
    assert kinds["a"] is ProjectKind.BACKUP_DUPLICATE
    assert kinds["b"] is ProjectKind.BACKUP_DUPLICATE
    assert kinds["c"] is ProjectKind.STANDALONE
    assert kinds["d"] is ProjectKind.EXPERIMENTAL
    assert kinds["e"] is ProjectKind.STANDALONE
    assert kinds["f"] is ProjectKind.STANDALONE
    assert kinds["g"] is ProjectKind.STANDALONE


def test_marking_is_idempotent() -> None:
    projects = [_entry("a", "fp"), _entry("b", "fp"), _entry("c", "fp", pinned=True)]
    mark_duplicates_by_fingerprint(projects)
    once = [item.kind for item in projects]

    assert mark_duplicates_by_fingerprint(projects) == 0
    assert [item.kind for item in projects] == once


def test_group_by_fingerprint_ignores_singletons_and_none() -> None:
    projects = [_entry("a", "x"), _entry("b", "x"), _entry("c", "y"), _entry("d", None)]
    groups = group_by_fingerprint(projects)
    assert list(groups) == ["x"]
    assert [item.path for item in groups["x"]] == ["a", "b"]
