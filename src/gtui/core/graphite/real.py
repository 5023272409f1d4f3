"""Filesystem implementation of GraphiteStore."""

import logging
from pathlib import Path

from gtui.core.errors import SourceReadError
from gtui.core.graphite.abc import GraphiteStore
from gtui.core.graphite.parsing import read_graphite_json_file, select_latest_snapshot
from gtui.core.graphite.types import GraphitePRInfo, GraphiteRepoConfig, GraphiteSnapshot

logger = logging.getLogger(__name__)

REPO_CONFIG_FILENAME = ".graphite_repo_config"
PR_INFO_FILENAME = ".graphite_pr_info"
SNAPSHOTS_DIRNAME = Path(".gt") / "snapshots"


class RealGraphiteStore(GraphiteStore):
    """Reads gt metadata from a Graphite directory (normally `<repo>/.git`)."""

    def __init__(self, graphite_dir: Path) -> None:
        self._graphite_dir = graphite_dir

    @property
    def graphite_dir(self) -> Path:
        return self._graphite_dir

    def read_repo_config(self) -> GraphiteRepoConfig:
        return read_graphite_json_file(
            self._graphite_dir / REPO_CONFIG_FILENAME, GraphiteRepoConfig
        )

    def read_latest_snapshot(self) -> GraphiteSnapshot:
        snapshots_dir = self._graphite_dir / SNAPSHOTS_DIRNAME
        if not snapshots_dir.is_dir():
            raise SourceReadError(snapshots_dir, "snapshot directory not found")

        try:
            filenames = [entry.name for entry in snapshots_dir.iterdir() if entry.is_file()]
        except OSError as e:
            raise SourceReadError(snapshots_dir, str(e)) from e

        latest = select_latest_snapshot(filenames)
        if latest is None:
            raise SourceReadError(snapshots_dir, "no snapshot files found")

        logger.debug("Using snapshot %s", latest)
        return read_graphite_json_file(snapshots_dir / latest, GraphiteSnapshot)

    def read_pr_info(self) -> GraphitePRInfo:
        return read_graphite_json_file(self._graphite_dir / PR_INFO_FILENAME, GraphitePRInfo)
