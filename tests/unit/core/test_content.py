"""Unit tests for detail and command log pane content."""

from gtui.core.content import (
    DETAIL_HINT,
    CommandLogEntry,
    branch_log_lines,
    command_log_lines,
    commit_patch_lines,
    detail_view_lines,
)
from gtui.core.navigation import NavigationState
from gtui.core.types import BranchInfo, CommitInfo
from tests.test_utils.graphite_builders import branch, branch_map_of, data_from_map


def _data():
    return data_from_map(
        branch_map_of(
            branch("main", commits=["aaaaaaaa"]),
            BranchInfo(
                name="feature",
                parent="main",
                commits=(CommitInfo(hash="bbbbbbbb", message="Commit on feature", patch="+x\n-y"),),
                pr_number=42,
                pr_state="OPEN",
                submitted_version=1,
                remote_version=3,
                pr_title="Add feature",
            ),
        ),
        current="feature",
    )


def test_branch_log_walks_to_trunk() -> None:
    lines = branch_log_lines(_data(), "feature")

    assert lines[0] == "◉ feature (current) (needs restack)"
    assert "│ PR #42 (OPEN) Add feature" in lines
    assert "│ Last submitted version: v1 (remote at v3, need get)" in lines
    assert "│ bbbbbbbb - Commit on feature" in lines
    assert "◯ main" in lines
    assert lines.index("◯ main") > lines.index("◉ feature (current) (needs restack)")


def test_branch_log_trunk_only() -> None:
    lines = branch_log_lines(_data(), "main")

    assert lines == ["◯ main", "│", "│ aaaaaaaa - Commit on main", "│"]


def test_branch_log_unknown_branch() -> None:
    assert branch_log_lines(_data(), "nope") == []


def test_commit_patch_lines() -> None:
    assert commit_patch_lines(CommitInfo(hash="h", message="m", patch="a\nb")) == ["a", "b"]
    assert commit_patch_lines(CommitInfo(hash="h", message="m")) == [
        "h - m",
        "(no patch available)",
    ]


def test_detail_view_prefers_selected_commit() -> None:
    state = NavigationState(cursor_branch="feature", cursor_commit="bbbbbbbb")

    assert detail_view_lines(state, _data()) == ["+x", "-y"]


def test_detail_view_shows_branch_log() -> None:
    state = NavigationState(cursor_branch="main")

    assert detail_view_lines(state, _data())[0] == "◯ main"


def test_detail_view_hint_without_cursor() -> None:
    assert detail_view_lines(NavigationState(), _data()) == [DETAIL_HINT]


def test_command_log_lines() -> None:
    entries = [
        CommandLogEntry(command="gt checkout a", output="Switched\nDone", success=True),
        CommandLogEntry(command="gt checkout b", output="", success=False),
    ]

    assert command_log_lines(entries) == [
        "$ gt checkout a",
        "Switched",
        "Done",
        "$ gt checkout b",
        "",
    ]
