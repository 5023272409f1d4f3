"""In-memory fake GraphiteStore for tests."""

import threading

from gtui.core.graphite.abc import GraphiteStore
from gtui.core.graphite.types import GraphitePRInfo, GraphiteRepoConfig, GraphiteSnapshot


class FakeGraphiteStore(GraphiteStore):
    """In-memory GraphiteStore.

    All state is provided through the constructor. A `*_raises` argument makes
    the corresponding read raise that exception instead of returning data.
    """

    def __init__(
        self,
        *,
        repo_config: GraphiteRepoConfig | None = None,
        snapshot: GraphiteSnapshot | None = None,
        pr_info: GraphitePRInfo | None = None,
        repo_config_raises: Exception | None = None,
        snapshot_raises: Exception | None = None,
        pr_info_raises: Exception | None = None,
    ) -> None:
        self._repo_config = repo_config if repo_config is not None else GraphiteRepoConfig(
            trunk="main"
        )
        self._snapshot = snapshot if snapshot is not None else GraphiteSnapshot(
            branches=[], current_branch_name="main"
        )
        self._pr_info = pr_info if pr_info is not None else GraphitePRInfo()
        self._repo_config_raises = repo_config_raises
        self._snapshot_raises = snapshot_raises
        self._pr_info_raises = pr_info_raises
        self._lock = threading.Lock()
        self._read_calls: list[str] = []

    def read_repo_config(self) -> GraphiteRepoConfig:
        self._record("repo_config")
        if self._repo_config_raises is not None:
            raise self._repo_config_raises
        return self._repo_config

    def read_latest_snapshot(self) -> GraphiteSnapshot:
        self._record("snapshot")
        if self._snapshot_raises is not None:
            raise self._snapshot_raises
        return self._snapshot

    def read_pr_info(self) -> GraphitePRInfo:
        self._record("pr_info")
        if self._pr_info_raises is not None:
            raise self._pr_info_raises
        return self._pr_info

    def _record(self, name: str) -> None:
        with self._lock:
            self._read_calls.append(name)

    @property
    def read_calls(self) -> list[str]:
        """Names of the reads performed, in completion order.

        This property is for test assertions only.
        """
        with self._lock:
            return list(self._read_calls)
