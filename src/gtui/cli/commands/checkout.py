"""`gtui checkout`: request a branch checkout through gt."""

import click

from gtui.cli.ensure import ensure_branch_exists
from gtui.cli.output import user_output
from gtui.core.context import GtuiContext
from gtui.core.session import AppSession


@click.command("checkout")
@click.argument("branch")
@click.pass_obj
def checkout_cmd(ctx: GtuiContext, branch: str) -> None:
    """Check out BRANCH using gt."""
    with AppSession(ctx) as session:
        if not session.refresh():
            raise click.ClickException(session.last_error or "Failed to load Graphite data")
        data = session.data
        if data is None:
            raise click.ClickException("No Graphite data loaded")
        ensure_branch_exists(data, branch)

        entry = session.request_checkout(branch)

    user_output(f"$ {entry.command}")
    if entry.output:
        user_output(entry.output)
    if not entry.success:
        raise SystemExit(1)
