"""Plain-text content for the detail and command log panes.

Renderers style these lines; the navigation state uses their count to bound
scrolling.
"""

from dataclasses import dataclass

from gtui.core.navigation import NavigationState, visible_commits
from gtui.core.tree import walk_to_trunk
from gtui.core.types import BranchName, CommitInfo, GraphiteData

CURRENT_MARKER = "◉"
OTHER_MARKER = "◯"
DETAIL_HINT = "Navigate the stack to view branch details"


@dataclass(frozen=True)
class CommandLogEntry:
    """One command issued from the viewer and its outcome."""

    command: str
    output: str
    success: bool


def branch_header(data: GraphiteData, name: BranchName) -> str:
    info = data.branch_map[name]
    is_current = name == data.current_branch
    marker = CURRENT_MARKER if is_current else OTHER_MARKER
    line = f"{marker} {name}"
    if is_current:
        line += " (current)"
    if info.needs_restack:
        line += " (needs restack)"
    return line


def branch_log_lines(data: GraphiteData, branch_name: BranchName) -> list[str]:
    """Render the `gt log -s` style view from a branch down to trunk.

    Returns an empty list for unknown branches.
    """
    lines: list[str] = []
    for name in walk_to_trunk(data.branch_map, branch_name, data.trunk_name):
        info = data.branch_map[name]
        lines.append(branch_header(data, name))
        lines.append("│")

        if info.has_pr:
            title = info.pr_title or (info.commits[0].message if info.commits else "No description")
            lines.append(f"│ PR #{info.pr_number} ({info.pr_state}) {title}")
            if info.submitted_version > 0:
                status = "need get" if info.needs_restack else "up to date"
                lines.append(
                    f"│ Last submitted version: v{info.submitted_version} "
                    f"(remote at v{info.remote_version}, {status})"
                )
            lines.append("│")

        for commit in info.commits:
            lines.append(f"│ {commit.hash[:11]} - {commit.message}")
        lines.append("│")
    return lines


def commit_patch_lines(commit: CommitInfo) -> list[str]:
    if not commit.patch:
        return [f"{commit.hash} - {commit.message}", "(no patch available)"]
    return commit.patch.split("\n")


def detail_view_lines(state: NavigationState, data: GraphiteData) -> list[str]:
    """Content of the detail pane for the current cursors.

    A selected commit shows its patch; otherwise a selected branch shows its
    stack log.
    """
    if state.cursor_commit is not None:
        for commit in visible_commits(state, data):
            if commit.hash == state.cursor_commit:
                return commit_patch_lines(commit)
    if state.cursor_branch is not None and state.cursor_branch in data.branch_map:
        return branch_log_lines(data, state.cursor_branch)
    return [DETAIL_HINT]


def command_log_lines(entries: list[CommandLogEntry]) -> list[str]:
    lines: list[str] = []
    for entry in entries:
        lines.append(f"$ {entry.command}")
        lines.extend(entry.output.splitlines() or [""])
    return lines
