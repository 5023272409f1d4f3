"""Load Graphite metadata into a GraphiteData snapshot.

The three source reads run concurrently and are joined before any building
happens. A failure in any read aborts the whole load; nothing partial is
returned.
"""

import itertools
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass

from gtui.core.branch_map import build_branch_map
from gtui.core.graphite.abc import GraphiteStore
from gtui.core.graphite.types import GraphitePRInfo, GraphiteRepoConfig, GraphiteSnapshot
from gtui.core.tree import build_tree
from gtui.core.types import GraphiteData

logger = logging.getLogger(__name__)


def _raise_first_error(futures: list[Future]) -> None:
    """Wait for every future, then re-raise the first failure in list order."""
    errors = [future.exception() for future in futures]
    for error in errors:
        if error is not None:
            raise error


def load_graphite_data(store: GraphiteStore, *, executor: Executor | None = None) -> GraphiteData:
    """Read config, snapshot, and PR cache concurrently and build the tree.

    Args:
        store: Source of Graphite metadata
        executor: Executor for the reads; a private 3-worker pool is used if None

    Returns:
        Freshly built GraphiteData

    Raises:
        SourceReadError: If any of the three reads fails
        TopologyError: If the resulting branch topology is inconsistent
    """
    owns_executor = executor is None
    pool = executor if executor is not None else ThreadPoolExecutor(
        max_workers=3, thread_name_prefix="gtui-read"
    )
    try:
        config_future: Future[GraphiteRepoConfig] = pool.submit(store.read_repo_config)
        snapshot_future: Future[GraphiteSnapshot] = pool.submit(store.read_latest_snapshot)
        pr_info_future: Future[GraphitePRInfo] = pool.submit(store.read_pr_info)
        _raise_first_error([config_future, snapshot_future, pr_info_future])
        repo_config = config_future.result()
        snapshot = snapshot_future.result()
        pr_info = pr_info_future.result()
    finally:
        if owns_executor:
            pool.shutdown(wait=True)

    logger.debug(
        "Read repo config (trunk=%s), snapshot (%d branches), PR info (%d PRs)",
        repo_config.trunk,
        len(snapshot.branches),
        len(pr_info.pr_infos),
    )

    branch_map = build_branch_map(snapshot, pr_info)
    tree = build_tree(branch_map, repo_config.trunk)
    return GraphiteData(
        trunk_name=repo_config.trunk,
        current_branch=snapshot.current_branch_name,
        branch_map=branch_map,
        tree=tree,
    )


@dataclass(frozen=True)
class IngestionTicket:
    """Identifies one ingestion request."""

    request_id: int


class IngestionCoordinator:
    """Last-request-wins bookkeeping for overlapping ingestions.

    Each call to begin() supersedes every earlier request. A result is only
    accepted by is_current() for the most recently issued ticket; stale
    completions are discarded by the caller.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def begin(self) -> IngestionTicket:
        with self._lock:
            self._latest = next(self._counter)
            return IngestionTicket(request_id=self._latest)

    def is_current(self, ticket: IngestionTicket) -> bool:
        with self._lock:
            return ticket.request_id == self._latest

    @property
    def latest_request_id(self) -> int:
        with self._lock:
            return self._latest
