from datetime import datetime, timedelta

import pytest

from orbit.model import ProjectKind
from orbit.scan.classify import classify_project

NOW = datetime.now().astimezone()
OLD_CUTOFF = datetime(2020, 1, 1).astimezone()


@pytest.mark.parametrize("path", ["my_backup", "project_old", "copy_of_project", "Work/BACKUP/x"])
def test_backup_patterns(path: str) -> None:
    assert classify_project(path, None, None) is ProjectKind.BACKUP_DUPLICATE


@pytest.mark.parametrize("path", ["sandbox_test", "experiment_v2", "try_something"])
def test_experimental_patterns(path: str) -> None:
    assert classify_project(path, None, None) is ProjectKind.EXPERIMENTAL


def test_backup_rule_precedes_experimental_rule() -> None:
    assert classify_project("old_sandbox", None, None) is ProjectKind.BACKUP_DUPLICATE


def test_recent_activity_is_active() -> None:
    assert classify_project("myproject", NOW, OLD_CUTOFF) is ProjectKind.ACTIVE_STANDALONE
    assert classify_project("myproject", NOW, None) is ProjectKind.ACTIVE_STANDALONE


def test_no_activity_is_standalone() -> None:
    assert classify_project("myproject", None, OLD_CUTOFF) is ProjectKind.STANDALONE
    assert classify_project("myproject", None, None) is ProjectKind.STANDALONE


def test_activity_before_cutoff_is_standalone() -> None:
    stale = OLD_CUTOFF - timedelta(days=1)
    assert classify_project("myproject", stale, OLD_CUTOFF) is ProjectKind.STANDALONE


def test_path_rules_take_precedence_over_activity() -> None:
    assert classify_project("backup_project", NOW, OLD_CUTOFF) is ProjectKind.BACKUP_DUPLICATE
