"""Output routing for CLI commands.

Human-readable messages go to stderr, machine-readable data to stdout.
"""

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", *, nl: bool = True) -> None:
    click.echo(message, nl=nl)
