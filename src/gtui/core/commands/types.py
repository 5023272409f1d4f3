"""Types shared by command runner implementations."""

from typing import NamedTuple


class CommandResult(NamedTuple):
    """Result from running an external command.

    Attributes:
        success: True if command exited with code 0, False otherwise
        stdout: Standard output from the command
        stderr: Standard error from the command
    """

    success: bool
    stdout: str
    stderr: str
