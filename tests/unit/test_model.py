from orbit.model import ProjectEntry, ProjectKind, is_pinned, sync_pinned_flags


def test_kind_labels() -> None:
    assert ProjectKind.ACTIVE_STANDALONE.label == "ActiveStandalone"
    assert ProjectKind.BACKUP_DUPLICATE.label == "BackupDuplicate"
    assert ProjectKind.VENDOR_THIRD_PARTY.label == "VendorThirdParty"


def test_sync_pinned_flags_follows_focus_list() -> None:
    projects = [
        ProjectEntry(path="a", kind=ProjectKind.STANDALONE, pinned=True),
        ProjectEntry(path="b", kind=ProjectKind.STANDALONE),
    ]
    sync_pinned_flags(projects, ["b"])
    assert [item.pinned for item in projects] == [False, True]
    assert is_pinned("b", ["b"]) and not is_pinned("a", ["b"])


def test_from_dict_accepts_only_real_booleans() -> None:
    entry = ProjectEntry.from_dict(
        {
            "path": "p",
            "kind": "standalone",
            "pinned": "true",
            "has_git": "false",
            "has_node": 1,
            "has_rust": True,
        }
    )
    assert entry.pinned is False
    assert entry.has_git is False
    assert entry.has_node is False
    assert entry.has_rust is True
