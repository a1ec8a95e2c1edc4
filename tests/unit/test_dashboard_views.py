from datetime import datetime
from pathlib import Path

from orbit.dashboard.views import DEFAULT_FILTERS, DashboardModel, ViewFilter
from orbit.index.session import session_path
from orbit.scan.census import CensusOptions
from orbit.index import store
from orbit.index.focus import Focus, save_focus
from orbit.model import OrbitIndex, ProjectEntry, ProjectKind


def _seed(root: Path) -> None:
    for name in ("active", "quiet", "dupe1", "dupe2", "notes"):
        (root / name).mkdir()
    store.save(
        root,
        OrbitIndex(
            projects=[
                ProjectEntry(
                    path="active",
                    kind=ProjectKind.ACTIVE_STANDALONE,
                    latest_mtime=datetime(2024, 3, 1).astimezone(),
                ),
                ProjectEntry(path="quiet", kind=ProjectKind.STANDALONE),
                ProjectEntry(
                    path="dupe1",
                    kind=ProjectKind.BACKUP_DUPLICATE,
                    latest_mtime=datetime(2024, 1, 1).astimezone(),
                    fingerprint="fp",
                ),
                ProjectEntry(
                    path="dupe2",
                    kind=ProjectKind.BACKUP_DUPLICATE,
                    latest_mtime=datetime(2024, 2, 1).astimezone(),
                    fingerprint="fp",
                ),
                ProjectEntry(
                    path="notes",
                    kind=ProjectKind.STANDALONE,
                    artifact_count=2,
                    latest_mtime=datetime(2024, 4, 1).astimezone(),
                ),
            ]
        ),
    )


def test_default_filters_show_active_focus_and_artifacts(workspace: Path) -> None:
    _seed(workspace)
    model = DashboardModel(workspace)
    assert model.filters == DEFAULT_FILTERS
    assert [item.path for item in model.projects()] == ["notes", "active"]


def test_toggling_backups_and_search(workspace: Path) -> None:
    _seed(workspace)
    model = DashboardModel(workspace)
    model.toggle_filter(ViewFilter.BACKUPS)
    assert [item.path for item in model.projects()] == ["notes", "active", "dupe2", "dupe1"]

    model.set_query("DUPE")
    assert [item.path for item in model.projects()] == ["dupe2", "dupe1"]

    model.toggle_filter(ViewFilter.BACKUPS)
    assert model.projects() == []


def test_pinned_flag_comes_from_focus_list(workspace: Path) -> None:
    _seed(workspace)
    save_focus(workspace, Focus(pinned=["quiet"]))
    model = DashboardModel(workspace)
    assert "quiet" in [item.path for item in model.projects()]
    assert [item.path for item in model.index.projects if item.pinned] == ["quiet"]


def test_duplicate_groups_are_ordered_by_recency(workspace: Path) -> None:
    _seed(workspace)
    model = DashboardModel(workspace)
    groups = model.duplicate_groups()
    assert len(groups) == 1
    fingerprint, members = groups[0]
    assert fingerprint == "fp"
    assert [item.path for item in members] == ["dupe2", "dupe1"]


def test_reload_bumps_generation_and_refreshes_views(workspace: Path) -> None:
    _seed(workspace)
    model = DashboardModel(workspace)
    first = model.projects()
    assert model.projects() is first

    generation = model.generation
    model.toggle_pin("quiet")

    assert model.generation == generation + 1
    assert "quiet" in [item.path for item in model.projects()]
    assert store.load(workspace).projects[1].pinned is True


def test_refresh_census_rebuilds_index(workspace: Path, write_file) -> None:
    write_file(workspace / "fresh" / "README.md", "hello")
    model = DashboardModel(workspace)
    assert model.index.projects == []

    model.refresh_census()

    assert [item.path for item in model.index.projects] == ["fresh"]
    assert "1 projects" in model.status_line()


def test_session_restores_filters_query_and_selection(workspace: Path) -> None:
    _seed(workspace)
    model = DashboardModel(workspace)
    model.toggle_filter(ViewFilter.BACKUPS)
    model.toggle_filter(ViewFilter.ACTIVE)
    model.set_query("dupe")
    model.selection = "dupe1"
    assert model.save_session() == session_path(workspace)

    restored = DashboardModel(workspace)
    assert restored.filters == frozenset(
        {ViewFilter.FOCUS, ViewFilter.BACKUPS, ViewFilter.ARTIFACTS}
    )
    assert restored.query == "dupe"
    assert [item.path for item in restored.projects()] == ["dupe2", "dupe1"]
    assert restored.selected_row() == 1


def test_session_with_no_filters_stays_empty(workspace: Path) -> None:
    _seed(workspace)
    model = DashboardModel(workspace)
    for view_filter in DEFAULT_FILTERS:
        model.toggle_filter(view_filter)
    model.save_session()

    restored = DashboardModel(workspace)
    assert restored.filters == frozenset()
    assert restored.projects() == []
    assert restored.selected_row() is None


def test_dry_run_does_not_save_session(workspace: Path) -> None:
    _seed(workspace)
    model = DashboardModel(workspace, census_options=CensusOptions(dry_run=True))
    assert model.save_session() is None
    assert not session_path(workspace).exists()
