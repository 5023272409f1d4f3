"""No-op command execution for --dry-run."""

from collections.abc import Sequence

from gtui.core.commands.abc import CommandRunner
from gtui.core.commands.types import CommandResult


class DryRunCommandRunner(CommandRunner):
    """Reports the command as successful without executing it.

    Usage:
        runner = DryRunCommandRunner()
        runner.run(["gt", "checkout", "feature"])  # nothing is executed
    """

    def run(self, args: Sequence[str]) -> CommandResult:
        return CommandResult(success=True, stdout=f"[dry-run] {' '.join(args)}", stderr="")
