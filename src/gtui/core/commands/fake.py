"""Fake CommandRunner for tests."""

from collections.abc import Sequence

from gtui.core.commands.abc import CommandRunner
from gtui.core.commands.types import CommandResult


class FakeCommandRunner(CommandRunner):
    """In-memory CommandRunner.

    Results are looked up by the joined command string; unknown commands
    succeed with empty output.
    """

    def __init__(
        self,
        *,
        results: dict[str, CommandResult] | None = None,
        run_raises: Exception | None = None,
    ) -> None:
        self._results = results if results is not None else {}
        self._run_raises = run_raises
        self._run_calls: list[list[str]] = []

    def run(self, args: Sequence[str]) -> CommandResult:
        self._run_calls.append(list(args))
        if self._run_raises is not None:
            raise self._run_raises
        return self._results.get(" ".join(args), CommandResult(success=True, stdout="", stderr=""))

    @property
    def run_calls(self) -> list[list[str]]:
        """Commands passed to run(), in call order.

        This property is for test assertions only.
        """
        return self._run_calls
