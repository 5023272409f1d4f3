"""Abstract interface for reading Graphite metadata."""

from abc import ABC, abstractmethod

from gtui.core.graphite.types import GraphitePRInfo, GraphiteRepoConfig, GraphiteSnapshot


class GraphiteStore(ABC):
    """Read-only access to the metadata gt persists for a repository.

    The three reads are independent of each other and may be called
    concurrently from different threads. Implementations must not cache
    results between calls: every ingestion pass sees fresh data.
    """

    @abstractmethod
    def read_repo_config(self) -> GraphiteRepoConfig:
        """Read the repository configuration (trunk name).

        Raises:
            SourceReadError: If the config is missing or malformed
        """

    @abstractmethod
    def read_latest_snapshot(self) -> GraphiteSnapshot:
        """Read the most recent topology snapshot.

        Raises:
            SourceReadError: If no snapshot exists or the latest one is malformed
        """

    @abstractmethod
    def read_pr_info(self) -> GraphitePRInfo:
        """Read cached pull request metadata.

        Raises:
            SourceReadError: If the PR cache is missing or malformed
        """
