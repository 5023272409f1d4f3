"""Navigation state machine for the branch viewer.

NavigationState is immutable; every transition returns a new value. The
transitions never raise for user input: moves past either end of a list are
clamped, and actions that do not apply to the active pane are no-ops.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum

from gtui.core.errors import NavigationInvariantViolation
from gtui.core.tree import flatten_branches
from gtui.core.types import BranchName, CommitInfo, GraphiteData
from gtui.core.viewport import clamp_scroll, reconcile_scroll


class Pane(Enum):
    OVERVIEW = "overview"
    STACK = "stack"
    COMMITS = "commits"
    DETAIL_VIEW = "detail_view"
    LOG = "log"


class Direction(Enum):
    UP = -1
    DOWN = 1


SCROLLABLE_PANES = frozenset({Pane.DETAIL_VIEW, Pane.LOG})


def _zero_offsets() -> dict[Pane, int]:
    return {pane: 0 for pane in Pane}


@dataclass(frozen=True)
class NavigationState:
    """Active pane, cursors, and one scroll offset per pane."""

    active_pane: Pane = Pane.OVERVIEW
    cursor_branch: BranchName | None = None
    cursor_commit: str | None = None
    scroll_offsets: Mapping[Pane, int] = field(default_factory=_zero_offsets)

    def offset(self, pane: Pane) -> int:
        return self.scroll_offsets.get(pane, 0)

    def with_offset(self, pane: Pane, offset: int) -> "NavigationState":
        offsets = dict(self.scroll_offsets)
        offsets[pane] = max(0, offset)
        return replace(self, scroll_offsets=offsets)


def commit_source_branch(state: NavigationState, data: GraphiteData) -> BranchName:
    """Branch whose commits the commits pane lists: the cursor branch, else the current one."""
    if state.cursor_branch is not None and state.cursor_branch in data.branch_map:
        return state.cursor_branch
    return data.current_branch


def visible_commits(state: NavigationState, data: GraphiteData) -> tuple[CommitInfo, ...]:
    return data.commits_for(commit_source_branch(state, data))


def _index_of(items: list[str], value: str | None) -> int:
    if value is None or value not in items:
        return 0
    return items.index(value)


def _step(index: int, direction: Direction, length: int) -> int:
    return min(max(0, index + direction.value), length - 1)


def _reset_detail_if_moved(before: NavigationState, after: NavigationState) -> NavigationState:
    """The detail pane shows different content once either cursor changes."""
    if (before.cursor_branch, before.cursor_commit) == (after.cursor_branch, after.cursor_commit):
        return after
    return after.with_offset(Pane.DETAIL_VIEW, 0)


def select_pane(state: NavigationState, pane: Pane) -> NavigationState:
    return replace(state, active_pane=pane)


def move_cursor(
    state: NavigationState,
    direction: Direction,
    *,
    data: GraphiteData,
    viewport_height: int,
) -> NavigationState:
    """Move the cursor of the active pane one step and keep it visible.

    In the stack pane the cursor walks the pre-order branch listing; in the
    commits pane it walks the commit list of commit_source_branch(). Other
    panes are left unchanged.

    Args:
        state: Current navigation state
        direction: Step direction
        data: Loaded branch data that bounds the cursor
        viewport_height: Visible line count of the active pane

    Returns:
        New navigation state
    """
    if state.active_pane is Pane.STACK:
        listing = flatten_branches(data.tree)
        if not listing:
            return state
        index = _step(_index_of(listing, state.cursor_branch), direction, len(listing))
        cursor_branch = listing[index]

        cursor_commit = state.cursor_commit
        commit_hashes = [c.hash for c in data.commits_for(cursor_branch)]
        if cursor_commit is not None and cursor_commit not in commit_hashes:
            cursor_commit = None

        offset = reconcile_scroll(index, len(listing), viewport_height, state.offset(Pane.STACK))
        moved = replace(state, cursor_branch=cursor_branch, cursor_commit=cursor_commit)
        return _reset_detail_if_moved(state, moved).with_offset(Pane.STACK, offset)

    if state.active_pane is Pane.COMMITS:
        hashes = [commit.hash for commit in visible_commits(state, data)]
        if not hashes:
            return state
        index = _step(_index_of(hashes, state.cursor_commit), direction, len(hashes))
        offset = reconcile_scroll(index, len(hashes), viewport_height, state.offset(Pane.COMMITS))
        moved = replace(state, cursor_commit=hashes[index])
        return _reset_detail_if_moved(state, moved).with_offset(Pane.COMMITS, offset)

    return state


def scroll(
    state: NavigationState,
    direction: Direction,
    *,
    content_lines: int,
    viewport_height: int,
) -> NavigationState:
    """Scroll the detail or log pane by one line. Other panes are unchanged."""
    if state.active_pane not in SCROLLABLE_PANES:
        return state

    pane = state.active_pane
    offset = clamp_scroll(state.offset(pane) + direction.value, content_lines, viewport_height)
    return state.with_offset(pane, offset)


def reconcile_with_data(
    state: NavigationState,
    data: GraphiteData,
    *,
    viewport_heights: Mapping[Pane, int] | None = None,
) -> NavigationState:
    """Re-validate cursors and offsets against freshly loaded data.

    A cursor branch that no longer exists is reset to the current branch (or
    cleared if that is unknown too). A cursor commit that is not in the commit
    list of the resulting commit source branch is cleared. The detail pane
    offset returns to 0 when either cursor changed. With `viewport_heights`,
    the stack and commits offsets are clamped to the new list lengths.
    """
    cursor_branch = state.cursor_branch
    if cursor_branch is not None and cursor_branch not in data.branch_map:
        cursor_branch = data.current_branch if data.current_branch in data.branch_map else None

    reconciled = replace(state, cursor_branch=cursor_branch)
    cursor_commit = state.cursor_commit
    if cursor_commit is not None:
        hashes = {commit.hash for commit in visible_commits(reconciled, data)}
        if cursor_commit not in hashes:
            cursor_commit = None

    result = _reset_detail_if_moved(state, replace(reconciled, cursor_commit=cursor_commit))
    if viewport_heights is None:
        return result

    lengths = {
        Pane.STACK: len(data.tree),
        Pane.COMMITS: len(visible_commits(result, data)),
    }
    for pane, length in lengths.items():
        height = viewport_heights.get(pane, 0)
        result = result.with_offset(pane, clamp_scroll(result.offset(pane), length, height))
    return result


def assert_navigation_invariants(state: NavigationState, data: GraphiteData) -> None:
    """Raise NavigationInvariantViolation if a cursor points outside `data`."""
    if state.cursor_branch is not None and state.cursor_branch not in data.branch_map:
        raise NavigationInvariantViolation(
            f'Cursor branch "{state.cursor_branch}" is not in the branch map'
        )

    if state.cursor_commit is not None:
        hashes = {commit.hash for commit in visible_commits(state, data)}
        if state.cursor_commit not in hashes:
            raise NavigationInvariantViolation(
                f'Cursor commit "{state.cursor_commit}" is not a commit of '
                f'"{commit_source_branch(state, data)}"'
            )

    for pane, offset in state.scroll_offsets.items():
        if offset < 0:
            raise NavigationInvariantViolation(f"Negative scroll offset {offset} for {pane.value}")
