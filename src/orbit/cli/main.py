"""Click CLI group: census, status, focus, whitelist, snap, export and tui."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import click

from orbit.config import get_settings
from orbit.errors import OrbitError
from orbit.logging import bind_command, configure_logging


@dataclass(slots=True)
class CliContext:
    root: Path
    json_output: bool


@contextmanager
def orbit_errors() -> Iterator[None]:
    try:
        yield
    except OrbitError as exc:
        raise click.ClickException(str(exc)) from exc


def _emit(ctx: CliContext, payload: dict[str, object], text: str) -> None:
    click.echo(json.dumps(payload) if ctx.json_output else text)


@click.group(invoke_without_command=True)
@click.option("--root", type=click.Path(path_type=Path), default=Path("."), show_default=True)
@click.option("--json", "json_output", is_flag=True, help="Print machine-readable JSON.")
@click.pass_context
def cli(ctx: click.Context, root: Path, json_output: bool) -> None:
    """Orbit: workspace awareness and safe exploration (project-local)."""
    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)
    bind_command(root, ctx.invoked_subcommand or "tui")
    ctx.obj = CliContext(root=root, json_output=json_output)
    if ctx.invoked_subcommand is None:
        ctx.invoke(tui)


@cli.command()
@click.pass_obj
def tui(obj: CliContext) -> None:
    """Open the interactive dashboard."""
    from orbit.dashboard.app import run_dashboard
    from orbit.dashboard.views import DashboardModel
    from orbit.scan.census import CensusOptions

    settings = get_settings()
    options = CensusOptions(dry_run=settings.feature_dry_run)
    run_dashboard(DashboardModel(obj.root, depth=settings.default_depth, census_options=options))


@cli.command()
@click.option("--depth", type=click.IntRange(min=0), default=None, help="Maximum walk depth.")
@click.option("--since", type=str, default=None, help="Only count activity since YYYY-MM-DD.")
@click.option("--dry-run", is_flag=True, help="Compute the census without writing the index.")
@click.pass_obj
def census(obj: CliContext, depth: int | None, since: str | None, dry_run: bool) -> None:
    """Discover, summarize and classify projects under the root."""
    from orbit.index.store import index_path
    from orbit.scan.census import CensusOptions, parse_cutoff, run_census
    from orbit.scan.progress import Progress

    settings = get_settings()
    progress = Progress(enabled=settings.feature_progress)
    options = CensusOptions(dry_run=dry_run or settings.feature_dry_run, progress=progress)
    with orbit_errors():
        cutoff = parse_cutoff(since)
        index = run_census(
            obj.root,
            settings.default_depth if depth is None else depth,
            cutoff,
            options=options,
        )
    for note in progress.drain():
        click.echo(f"[progress] {note}", err=True)

    target = index_path(obj.root)
    if options.dry_run:
        _emit(
            obj,
            {"status": "dry_run", "index_path": str(target), "project_count": len(index.projects)},
            f"Dry run: {len(index.projects)} projects found, {target} not updated.",
        )
        return
    _emit(
        obj,
        {"status": "complete", "index_path": str(target), "project_count": len(index.projects)},
        f"Census complete. Updated {target}",
    )


@cli.command()
@click.pass_obj
def status(obj: CliContext) -> None:
    """Print inventory totals from the committed index."""
    from orbit.index.status import build_status, format_status

    result = build_status(obj.root)
    _emit(obj, result, format_status(result))


@cli.command()
@click.option("--add", type=str, default=None, help="Pin a root-relative project path.")
@click.option("--remove", type=str, default=None, help="Unpin a project path.")
@click.option("--list", "list_only", is_flag=True, help="List pinned paths.")
@click.pass_obj
def focus(obj: CliContext, add: str | None, remove: str | None, list_only: bool) -> None:
    """Manage pinned (focus) projects."""
    from orbit.index.focus import load_focus, pin, unpin

    if list_only or (add is None and remove is None):
        pinned = load_focus(obj.root).pinned
        _emit(obj, {"pinned": pinned}, "\n".join(pinned))
        return
    with orbit_errors():
        if add is not None:
            current = pin(obj.root, add)
            _emit(obj, {"status": "updated", "pinned": current.pinned}, "Pinned updated.")
        if remove is not None:
            current = unpin(obj.root, remove)
            _emit(obj, {"status": "updated", "pinned": current.pinned}, "Pinned updated.")


@cli.command()
@click.option("--add", type=str, default=None, help="Protect a root-relative path.")
@click.option("--remove", type=str, default=None, help="Stop protecting a path.")
@click.option("--list", "list_only", is_flag=True, help="List protected paths.")
@click.pass_obj
def whitelist(obj: CliContext, add: str | None, remove: str | None, list_only: bool) -> None:
    """Manage paths excluded from snapshot copies."""
    from orbit.index.whitelist import add_whitelist, load_whitelist, remove_whitelist

    if list_only or (add is None and remove is None):
        paths = load_whitelist(obj.root).paths
        _emit(obj, {"paths": paths}, "\n".join(paths))
        return
    with orbit_errors():
        if add is not None:
            current = add_whitelist(obj.root, add)
            _emit(obj, {"status": "updated", "paths": current.paths}, "Whitelist updated.")
        if remove is not None:
            current = remove_whitelist(obj.root, remove)
            _emit(obj, {"status": "updated", "paths": current.paths}, "Whitelist updated.")


@cli.command()
@click.option("-l", "--label", type=str, default=None, help="Suffix for the snapshot directory.")
@click.option("--dry-run", is_flag=True, help="Show the target without writing anything.")
@click.pass_obj
def snap(obj: CliContext, label: str | None, dry_run: bool) -> None:
    """Snapshot focus, index and pinned projects' artifacts."""
    from orbit.snapshot import snapshot_pinned

    dry_run = dry_run or get_settings().feature_dry_run
    with orbit_errors():
        target = snapshot_pinned(obj.root, label, dry_run=dry_run)
    if dry_run:
        _emit(obj, {"status": "dry_run", "snapshot_dir": str(target)}, f"Dry run: {target}")
        return
    _emit(obj, {"status": "created", "snapshot_dir": str(target)}, f"Snapshot created: {target}")


@cli.command()
@click.option("--dry-run", is_flag=True, help="Show the target without writing anything.")
@click.pass_obj
def export(obj: CliContext, dry_run: bool) -> None:
    """Export the index as Markdown, JSON and CSV."""
    from orbit.export.bundle import export_all

    dry_run = dry_run or get_settings().feature_dry_run
    with orbit_errors():
        target = export_all(obj.root, dry_run=dry_run)
    if dry_run:
        _emit(obj, {"status": "dry_run", "exports_dir": str(target)}, f"Dry run: {target}")
        return
    _emit(obj, {"status": "exported", "exports_dir": str(target)}, f"Exported to {target}")


def main() -> None:
    cli()
