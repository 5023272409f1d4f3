"""`gtui branches`: flat pre-order branch listing."""

import click

from gtui.cli.ensure import load_data_or_exit
from gtui.cli.json_schemas import build_branches_response
from gtui.cli.output import machine_output
from gtui.core.context import GtuiContext
from gtui.core.tree import flatten_branches


@click.command("branches")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_obj
def branches_cmd(ctx: GtuiContext, as_json: bool) -> None:
    """List gt-tracked branches, trunk first, in depth-first order."""
    data = load_data_or_exit(ctx)
    ordered = flatten_branches(data.tree)

    if as_json:
        response = build_branches_response(data, ordered)
        machine_output(response.model_dump_json(indent=2))
        return

    for name in ordered:
        suffix = " (current)" if name == data.current_branch else ""
        machine_output(f"{name}{suffix}")
