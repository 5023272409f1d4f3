"""Abstract interface for running external commands (gt, git)."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from gtui.core.commands.types import CommandResult


class CommandRunner(ABC):
    """Fire-and-forget execution of repository-mutating commands.

    The viewer never interprets command output beyond recording it in the
    command log.
    """

    @abstractmethod
    def run(self, args: Sequence[str]) -> CommandResult:
        """Run a command to completion.

        Args:
            args: Command and arguments, e.g. ["gt", "checkout", "feature"]

        Returns:
            CommandResult describing the outcome. A non-zero exit is reported
            through `success`, not raised.

        Raises:
            RuntimeError: If the command binary cannot be found
        """
