"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from gtui.core.commands.abc import CommandRunner
from gtui.core.commands.dry_run import DryRunCommandRunner
from gtui.core.commands.fake import FakeCommandRunner
from gtui.core.commands.real import RealCommandRunner
from gtui.core.global_config import ConfigStore, FilesystemConfigStore, GlobalConfig
from gtui.core.graphite.abc import GraphiteStore
from gtui.core.graphite.fake import FakeGraphiteStore
from gtui.core.graphite.real import RealGraphiteStore


@dataclass(frozen=True)
class GtuiContext:
    """Immutable context holding all dependencies for gtui operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    graphite: GraphiteStore
    commands: CommandRunner
    config: GlobalConfig
    cwd: Path  # Current working directory at CLI invocation
    dry_run: bool

    @staticmethod
    def for_test(
        *,
        graphite: GraphiteStore | None = None,
        commands: CommandRunner | None = None,
        config: GlobalConfig | None = None,
        cwd: Path | None = None,
        dry_run: bool = False,
    ) -> "GtuiContext":
        """Create a context from fakes, overriding only what the test needs.

        Example:
            >>> ctx = GtuiContext.for_test(graphite=FakeGraphiteStore(snapshot=snapshot))
        """
        return GtuiContext(
            graphite=graphite if graphite is not None else FakeGraphiteStore(),
            commands=commands if commands is not None else FakeCommandRunner(),
            config=config if config is not None else GlobalConfig(),
            cwd=cwd if cwd is not None else Path("/fake/repo"),
            dry_run=dry_run,
        )


def create_context(
    *,
    dry_run: bool,
    graphite_dir: Path | None = None,
    config_store: ConfigStore | None = None,
) -> GtuiContext:
    """Create production context with real implementations.

    Args:
        dry_run: If True, repository actions are reported but not executed
        graphite_dir: Override for the gt metadata directory; defaults to
            `<cwd>/<config.graphite_dir>`
        config_store: Source of user configuration; defaults to ~/.gtui/config.toml

    Returns:
        GtuiContext with real implementations
    """
    # 1. Capture cwd (no deps)
    cwd = Path.cwd()

    # 2. Load user config (defaults if the file does not exist)
    store = config_store if config_store is not None else FilesystemConfigStore()
    config = store.load()

    # 3. Create integrations
    resolved_dir = graphite_dir if graphite_dir is not None else cwd / config.graphite_dir
    commands: CommandRunner = RealCommandRunner(cwd)
    if dry_run:
        commands = DryRunCommandRunner()

    return GtuiContext(
        graphite=RealGraphiteStore(resolved_dir),
        commands=commands,
        config=config,
        cwd=cwd,
        dry_run=dry_run,
    )
