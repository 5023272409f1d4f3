"""Session state: loaded data, navigation, and command log under one lock.

AppSession is the single unit of mutation for a viewer session. Every user
event and every ingestion completion takes the same lock, so a reload can
never interleave with an in-flight navigation transition.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass

from gtui.core.content import (
    CommandLogEntry,
    branch_header,
    command_log_lines,
    detail_view_lines,
)
from gtui.core.context import GtuiContext
from gtui.core.errors import GtuiError
from gtui.core.ingestion import IngestionCoordinator, IngestionTicket, load_graphite_data
from gtui.core.navigation import (
    SCROLLABLE_PANES,
    Direction,
    NavigationState,
    Pane,
    move_cursor,
    reconcile_with_data,
    scroll,
    select_pane,
    visible_commits,
)
from gtui.core.tree import flatten_branches
from gtui.core.types import BranchName, GraphiteData
from gtui.core.viewport import clamp_scroll, visible_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionView:
    """Consistent read-only view of the session for renderers."""

    data: GraphiteData | None
    state: NavigationState
    command_log: tuple[CommandLogEntry, ...]
    last_error: str | None


class AppSession:
    """Owns the (GraphiteData, NavigationState) pair for one viewer session.

    Construct one per session and close() it (or use it as a context
    manager) when the session ends.
    """

    def __init__(self, ctx: GtuiContext) -> None:
        self._ctx = ctx
        self._lock = threading.RLock()
        self._coordinator = IngestionCoordinator()
        self._data: GraphiteData | None = None
        self._state = NavigationState()
        self._command_log: list[CommandLogEntry] = []
        self._last_error: str | None = None
        self._executor: ThreadPoolExecutor | None = None

    def __enter__(self) -> "AppSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        with self._lock:
            executor = self._executor
            self._executor = None
        if executor is not None:
            executor.shutdown(wait=True)

    @property
    def data(self) -> GraphiteData | None:
        with self._lock:
            return self._data

    @property
    def state(self) -> NavigationState:
        with self._lock:
            return self._state

    @property
    def last_error(self) -> str | None:
        with self._lock:
            return self._last_error

    @property
    def command_log(self) -> tuple[CommandLogEntry, ...]:
        with self._lock:
            return tuple(self._command_log)

    def view(self) -> SessionView:
        with self._lock:
            return SessionView(
                data=self._data,
                state=self._state,
                command_log=tuple(self._command_log),
                last_error=self._last_error,
            )

    # Ingestion

    def refresh(self) -> bool:
        """Reload gt metadata and swap it in if this is still the newest request.

        On failure the previous data stays active and the error message is
        kept in last_error.

        Returns:
            True if new data was applied, False on failure or if superseded
        """
        return self._refresh(self._coordinator.begin())

    def refresh_in_background(self) -> "Future[bool]":
        """Start a refresh on a background thread. Newer requests supersede older ones.

        The request is ticketed immediately, so a request that is superseded
        while still queued is skipped without reading anything.
        """
        ticket = self._coordinator.begin()
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="gtui-ingest")
            executor = self._executor
        return executor.submit(self._refresh, ticket)

    def _refresh(self, ticket: IngestionTicket) -> bool:
        if not self._coordinator.is_current(ticket):
            logger.debug("Skipping superseded ingestion #%d", ticket.request_id)
            return False

        logger.debug("Starting ingestion #%d", ticket.request_id)
        try:
            data = load_graphite_data(self._ctx.graphite)
        except GtuiError as e:
            with self._lock:
                if not self._coordinator.is_current(ticket):
                    logger.debug("Discarding failure of stale ingestion #%d", ticket.request_id)
                    return False
                self._last_error = str(e)
            logger.warning("Failed to load Graphite data: %s", e)
            return False

        with self._lock:
            if not self._coordinator.is_current(ticket):
                logger.warning(
                    "Discarding stale ingestion #%d (latest is #%d)",
                    ticket.request_id,
                    self._coordinator.latest_request_id,
                )
                return False
            self._apply_data(data)
        return True

    def replace_data(self, data: GraphiteData) -> None:
        """Install already-built data, superseding any in-flight ingestion."""
        self._coordinator.begin()
        with self._lock:
            self._apply_data(data)

    def _apply_data(self, data: GraphiteData) -> None:
        self._data = data
        heights = {pane: self._ctx.config.viewport_height(pane) for pane in Pane}
        state = reconcile_with_data(self._state, data, viewport_heights=heights)
        detail_lines = len(detail_view_lines(state, data))
        detail_offset = clamp_scroll(
            state.offset(Pane.DETAIL_VIEW), detail_lines, heights[Pane.DETAIL_VIEW]
        )
        self._state = state.with_offset(Pane.DETAIL_VIEW, detail_offset)
        self._last_error = None
        logger.debug("Applied data with %d branches", len(data.branch_map))

    # User events

    def select_pane(self, pane: Pane) -> NavigationState:
        with self._lock:
            self._state = select_pane(self._state, pane)
            return self._state

    def move_cursor(self, direction: Direction) -> NavigationState:
        with self._lock:
            if self._data is None:
                return self._state
            height = self._ctx.config.viewport_height(self._state.active_pane)
            self._state = move_cursor(
                self._state, direction, data=self._data, viewport_height=height
            )
            return self._state

    def scroll(self, direction: Direction) -> NavigationState:
        with self._lock:
            pane = self._state.active_pane
            if pane not in SCROLLABLE_PANES:
                return self._state
            content = self._pane_content(pane)
            self._state = scroll(
                self._state,
                direction,
                content_lines=len(content),
                viewport_height=self._ctx.config.viewport_height(pane),
            )
            return self._state

    def visible_lines(self, pane: Pane) -> list[str]:
        """The slice of a pane's content that fits its viewport at the current offset."""
        with self._lock:
            content = self._pane_content(pane)
            start, end = visible_window(
                len(content), self._ctx.config.viewport_height(pane), self._state.offset(pane)
            )
            return content[start:end]

    def _pane_content(self, pane: Pane) -> list[str]:
        if pane is Pane.LOG:
            return command_log_lines(self._command_log)
        if self._data is None:
            return []
        if pane is Pane.STACK:
            return [branch_header(self._data, name) for name in flatten_branches(self._data.tree)]
        if pane is Pane.COMMITS:
            return [f"{c.hash} - {c.message}" for c in visible_commits(self._state, self._data)]
        if pane is Pane.DETAIL_VIEW:
            return detail_view_lines(self._state, self._data)
        return []

    def request_checkout(self, branch: BranchName) -> CommandLogEntry:
        """Forward a checkout request to the command runner and log the outcome.

        The branch name is passed through verbatim. The loaded data is not
        refreshed; callers refresh once the command has finished.
        """
        args = [self._ctx.config.gt_command, "checkout", branch]
        logger.info("Checkout requested for %s", branch)
        try:
            result = self._ctx.commands.run(args)
        except RuntimeError as e:
            entry = CommandLogEntry(command=" ".join(args), output=str(e), success=False)
        else:
            output = result.stdout.strip() if result.success else result.stderr.strip()
            entry = CommandLogEntry(command=" ".join(args), output=output, success=result.success)

        with self._lock:
            self._command_log.append(entry)
        return entry
