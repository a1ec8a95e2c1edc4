from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from orbit.cli.main import cli


def _invoke(root: Path, *args: str):
    return CliRunner().invoke(cli, ["--root", str(root), *args])


def test_census_focus_export_status(workspace: Path, write_file) -> None:
    write_file(workspace / "proj1" / "README.md", "hello\n")

    census = _invoke(workspace, "census", "--depth", "4", "--since", "1970-01-01")
    assert census.exit_code == 0, census.output
    assert (workspace / ".orbit" / "index.json").is_file()

    focus = _invoke(workspace, "focus", "--add", "proj1")
    assert focus.exit_code == 0, focus.output
    assert "Pinned updated." in focus.output
    pinned = json.loads((workspace / ".orbit" / "focus.json").read_text())["pinned"]
    assert pinned == ["proj1"]
    index = json.loads((workspace / ".orbit" / "index.json").read_text())
    assert index["projects"][0]["pinned"] is True

    export = _invoke(workspace, "export")
    assert export.exit_code == 0, export.output
    exports = workspace / ".orbit" / "exports"
    for name in ("summary.md", "index.json", "index.csv"):
        assert (exports / name).is_file()

    status = _invoke(workspace, "--json", "status")
    assert status.exit_code == 0, status.output
    payload = json.loads(status.output)
    assert payload["indexed_projects"] == 1
    assert payload["active"] == 1
    assert payload["pinned"] == 1


def test_census_json_output(workspace: Path, write_file) -> None:
    write_file(workspace / "a" / "README.md", "same")
    write_file(workspace / "b" / "README.md", "same")

    result = _invoke(workspace, "--json", "census")

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["status"] == "complete"
    assert payload["project_count"] == 2
    kinds = {
        item["kind"]
        for item in json.loads((workspace / ".orbit" / "index.json").read_text())["projects"]
    }
    assert kinds == {"backup_duplicate"}


def test_invalid_since_fails_before_scanning(workspace: Path, write_file) -> None:
    write_file(workspace / "proj1" / "README.md")

    result = _invoke(workspace, "census", "--since", "15/01/2024")

    assert result.exit_code == 1
    assert "15/01/2024" in result.output
    assert "YYYY-MM-DD" in result.output
    assert not (workspace / ".orbit").exists()


def test_census_dry_run_flag_and_feature_env(workspace: Path, write_file, monkeypatch) -> None:
    write_file(workspace / "proj1" / "README.md")

    result = _invoke(workspace, "census", "--dry-run")
    assert result.exit_code == 0, result.output
    assert "Dry run" in result.output
    assert not (workspace / ".orbit").exists()

    monkeypatch.setenv("ORBIT_FEATURE_DRY_RUN", "1")
    from orbit.config import get_settings

    get_settings.cache_clear()
    result = _invoke(workspace, "export")
    assert result.exit_code == 0, result.output
    assert not (workspace / ".orbit").exists()


def test_focus_rejects_missing_path(workspace: Path) -> None:
    result = _invoke(workspace, "focus", "--add", "ghost")
    assert result.exit_code == 1
    assert "Path does not exist" in result.output
    assert not (workspace / ".orbit" / "focus.json").exists()


def test_focus_and_whitelist_listing(workspace: Path) -> None:
    (workspace / "proj").mkdir()
    assert _invoke(workspace, "focus", "--add", "proj").exit_code == 0
    assert _invoke(workspace, "whitelist", "--add", "proj").exit_code == 0

    focus = _invoke(workspace, "--json", "focus", "--list")
    assert json.loads(focus.output) == {"pinned": ["proj"]}
    listed = _invoke(workspace, "whitelist", "--list")
    assert listed.output.strip() == "proj"

    removed = _invoke(workspace, "--json", "whitelist", "--remove", "proj")
    assert json.loads(removed.output) == {"status": "updated", "paths": []}


def test_snap_skips_whitelisted_projects(workspace: Path, write_file) -> None:
    write_file(workspace / "proj" / "HANDOFF.md", "hi")
    write_file(workspace / "keep" / "plan.md", "plan")
    assert _invoke(workspace, "focus", "--add", "proj").exit_code == 0
    assert _invoke(workspace, "focus", "--add", "keep").exit_code == 0
    assert _invoke(workspace, "whitelist", "--add", "proj").exit_code == 0

    result = _invoke(workspace, "--json", "snap", "--label", "test")

    assert result.exit_code == 0, result.output
    snap_dir = Path(json.loads(result.output)["snapshot_dir"])
    assert snap_dir.name.endswith("_test")
    assert [path.name for path in (snap_dir / "artifacts").iterdir()] == ["keep__plan.md"]


def test_status_on_empty_workspace(workspace: Path) -> None:
    result = _invoke(workspace, "status")
    assert result.exit_code == 0
    assert "Indexed projects: 0" in result.output


def test_commands_survive_corrupt_index(workspace: Path) -> None:
    (workspace / "proj").mkdir()
    index = workspace / ".orbit" / "index.json"
    index.parent.mkdir(parents=True)
    index.write_text('{"projects": ["x", null]}')

    status = _invoke(workspace, "status")
    assert status.exit_code == 0, status.output
    assert "Indexed projects: 0" in status.output
    assert _invoke(workspace, "focus", "--add", "proj").exit_code == 0
    assert _invoke(workspace, "export").exit_code == 0
