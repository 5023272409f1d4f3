import logging
import os
from pathlib import Path

import click

from gtui.cli.commands.branches import branches_cmd
from gtui.cli.commands.checkout import checkout_cmd
from gtui.cli.commands.log import log_cmd
from gtui.cli.commands.tree import tree_cmd
from gtui.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

# Enable debug logging if GTUI_DEBUG environment variable is set
if os.getenv("GTUI_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="gtui")
@click.option("--dry-run", is_flag=True, help="Report gt commands instead of running them.")
@click.option(
    "--graphite-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding gt metadata (default: .git in the current directory).",
)
@click.pass_context
def cli(ctx: click.Context, dry_run: bool, graphite_dir: Path | None) -> None:
    """Browse Graphite branch stacks."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context(dry_run=dry_run, graphite_dir=graphite_dir)
        except ValueError as e:
            raise click.ClickException(str(e)) from e


cli.add_command(branches_cmd)
cli.add_command(checkout_cmd)
cli.add_command(log_cmd)
cli.add_command(tree_cmd)


def main() -> None:
    """CLI entry point used by the `gtui` console script."""
    cli()
