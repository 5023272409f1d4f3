"""Production CommandRunner backed by subprocess."""

import logging
from collections.abc import Sequence
from pathlib import Path

from gtui.core.commands.abc import CommandRunner
from gtui.core.commands.types import CommandResult
from gtui.core.subprocess_utils import run_subprocess_with_context

logger = logging.getLogger(__name__)


class RealCommandRunner(CommandRunner):
    def __init__(self, cwd: Path) -> None:
        self._cwd = cwd

    def run(self, args: Sequence[str]) -> CommandResult:
        logger.debug("Running %s in %s", " ".join(args), self._cwd)
        result = run_subprocess_with_context(
            args, f"run {args[0]}", cwd=self._cwd, check=False
        )
        return CommandResult(
            success=result.returncode == 0,
            stdout=result.stdout,
            stderr=result.stderr,
        )
