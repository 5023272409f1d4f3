"""`gtui tree`: print the branch tree from trunk."""

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from gtui.cli.ensure import load_data_or_exit
from gtui.core.content import CURRENT_MARKER, OTHER_MARKER
from gtui.core.context import GtuiContext
from gtui.core.types import BranchName, GraphiteData


def _label(data: GraphiteData, name: BranchName) -> str:
    info = data.branch_map[name]
    is_current = name == data.current_branch
    marker = CURRENT_MARKER if is_current else OTHER_MARKER
    if is_current:
        label = f"{marker} [bold cyan]{escape(name)}[/]"
    else:
        label = f"{marker} {escape(name)}"
    if info.has_pr:
        label += f" [dim]#{info.pr_number} {info.pr_state}[/]"
    if info.needs_restack:
        label += " [yellow](needs restack)[/]"
    return label


def build_rich_tree(data: GraphiteData) -> Tree:
    """Mirror the branch tree as a rich Tree, children in stored order."""
    root_name = data.tree.root.name
    rich_root = Tree(_label(data, root_name))
    pending: list[tuple[BranchName, Tree]] = [(root_name, rich_root)]
    while pending:
        name, rich_node = pending.pop()
        for child in data.tree.children_of(name):
            pending.append((child, rich_node.add(_label(data, child))))
    return rich_root


@click.command("tree")
@click.pass_obj
def tree_cmd(ctx: GtuiContext) -> None:
    """Show the gt branch tree rooted at trunk."""
    data = load_data_or_exit(ctx)
    Console().print(build_rich_tree(data))
