"""Helpers that turn domain failures into CLI errors."""

import click

from gtui.core.context import GtuiContext
from gtui.core.errors import GtuiError
from gtui.core.ingestion import load_graphite_data
from gtui.core.types import GraphiteData


def load_data_or_exit(ctx: GtuiContext) -> GraphiteData:
    """Load gt metadata, converting ingestion failures into a ClickException."""
    try:
        return load_graphite_data(ctx.graphite)
    except GtuiError as e:
        raise click.ClickException(str(e)) from e


def ensure_branch_exists(data: GraphiteData, branch: str) -> None:
    if branch not in data.branch_map:
        known = ", ".join(data.branch_map)
        raise click.ClickException(f"Unknown branch '{branch}'. Known branches: {known}")
