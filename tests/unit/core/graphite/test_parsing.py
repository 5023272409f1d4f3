"""Unit tests for Graphite JSON parsing helpers."""

from pathlib import Path

import pytest

from gtui.core.errors import SourceReadError
from gtui.core.graphite.parsing import (
    parse_graphite_json,
    read_graphite_json_file,
    select_latest_snapshot,
)
from gtui.core.graphite.types import GraphitePRInfo, GraphiteRepoConfig, GraphiteSnapshot
from tests.conftest import load_fixture

SOURCE = Path("/repo/.git/.graphite_repo_config")


def test_parse_repo_config_ignores_extra_fields() -> None:
    """Test that only the trunk matters in the repo config."""
    config = parse_graphite_json(
        load_fixture("graphite/.graphite_repo_config"), GraphiteRepoConfig, source=SOURCE
    )

    assert config.trunk == "main"
    assert [t.name for t in config.trunks] == ["main"]


def test_parse_snapshot_preserves_branch_order() -> None:
    """Test that snapshot branches keep their on-disk order and camelCase fields map."""
    snapshot = parse_graphite_json(
        load_fixture("graphite/.gt/snapshots/2024-06-02T09-30-00.snapshot"),
        GraphiteSnapshot,
        source=SOURCE,
    )

    assert snapshot.current_branch_name == "feature/auth-login"
    assert [name for name, _ in snapshot.branches] == [
        "main",
        "feature/auth-base",
        "feature/auth-login",
        "fix/typo",
    ]
    _, auth_base = snapshot.branches[1]
    assert auth_base.parent_branch_name == "main"
    assert auth_base.last_submitted_version is not None
    assert auth_base.last_submitted_version.head_sha == "feedfacecafebeef0011"


def test_parse_pr_info() -> None:
    """Test parsing the PR cache, including optional version fields."""
    content = load_fixture("graphite/.graphite_pr_info")
    info = parse_graphite_json(content, GraphitePRInfo, source=SOURCE)

    assert [pr.pr_number for pr in info.pr_infos] == [101, 99]
    assert info.pr_infos[0].head_ref_name == "feature/auth-base"
    assert len(info.pr_infos[0].versions) == 2
    assert info.pr_infos[0].versions[1].author_github_handle is None


def test_parse_invalid_json_raises_source_read_error() -> None:
    """Test that unparseable content names the source file."""
    with pytest.raises(SourceReadError, match="invalid JSON") as exc_info:
        parse_graphite_json("{not json", GraphiteRepoConfig, source=SOURCE)

    assert exc_info.value.path == SOURCE
    assert str(SOURCE) in str(exc_info.value)


def test_parse_missing_required_field_raises_source_read_error() -> None:
    """Test that schema violations are reported as read errors."""
    with pytest.raises(SourceReadError, match="unexpected structure"):
        parse_graphite_json('{"trunks": []}', GraphiteRepoConfig, source=SOURCE)


def test_parse_invalid_validation_result_raises() -> None:
    """Test that an unknown validationResult value is rejected."""
    content = """{
        "currentBranchName": "main",
        "branches": [
            ["main", {"children": [], "branchRevision": "abc", "validationResult": "WEIRD"}]
        ]
    }"""

    with pytest.raises(SourceReadError):
        parse_graphite_json(content, GraphiteSnapshot, source=SOURCE)


def test_parse_invalid_pr_state_raises() -> None:
    """Test that PR states outside OPEN/CLOSED/MERGED are rejected."""
    content = """{"prInfos": [{
        "prNumber": 1, "title": "t", "state": "DRAFT", "headRefName": "a",
        "baseRefName": "main", "isDraft": false, "versions": []
    }]}"""

    with pytest.raises(SourceReadError):
        parse_graphite_json(content, GraphitePRInfo, source=SOURCE)


def test_read_missing_file_raises(tmp_path: Path) -> None:
    """Test that a missing file is a SourceReadError, not FileNotFoundError."""
    path = tmp_path / ".graphite_pr_info"

    with pytest.raises(SourceReadError, match="file not found"):
        read_graphite_json_file(path, GraphitePRInfo)


def test_select_latest_snapshot_picks_lexicographically_last() -> None:
    """Test latest snapshot selection by filename."""
    names = ["2024-01-02.snapshot", "2024-01-10.snapshot", "2024-01-03.snapshot"]

    assert select_latest_snapshot(names) == "2024-01-10.snapshot"


def test_select_latest_snapshot_ignores_other_files() -> None:
    """Test that files without the .snapshot suffix are not candidates."""
    names = ["a.snapshot", "z.txt", "zz.snapshot.bak"]

    assert select_latest_snapshot(names) == "a.snapshot"


def test_select_latest_snapshot_empty() -> None:
    """Test that no candidates yields None."""
    assert select_latest_snapshot([]) is None
    assert select_latest_snapshot(["notes.md"]) is None
