"""`gtui log`: stack log for a branch."""

import click

from gtui.cli.ensure import ensure_branch_exists, load_data_or_exit
from gtui.cli.output import machine_output
from gtui.core.content import branch_log_lines
from gtui.core.context import GtuiContext
from gtui.core.errors import TopologyError


@click.command("log")
@click.argument("branch", required=False)
@click.pass_obj
def log_cmd(ctx: GtuiContext, branch: str | None) -> None:
    """Show BRANCH and its ancestors down to trunk (defaults to the current branch)."""
    data = load_data_or_exit(ctx)
    target = branch if branch is not None else data.current_branch
    ensure_branch_exists(data, target)

    try:
        lines = branch_log_lines(data, target)
    except TopologyError as e:
        raise click.ClickException(str(e)) from e

    for line in lines:
        machine_output(line)
