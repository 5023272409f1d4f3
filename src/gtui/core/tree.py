"""Tree construction and traversal over a resolved branch map.

The tree is an arena: nodes live in a flat tuple and refer to each other by
index, so parent and child links never form ownership cycles. Branch data is
externally controlled and may be stale or corrupt, so every traversal here
tracks visited names and fails with TopologyError instead of looping.
"""

import logging

from gtui.core.errors import TopologyError
from gtui.core.types import BranchMap, BranchName, BranchTree, TreeNode, children_of

logger = logging.getLogger(__name__)


def build_tree(branch_map: BranchMap, trunk_name: BranchName) -> BranchTree:
    """Build a single-rooted tree from a branch map.

    Children are attached in branch map order, which is snapshot order, so
    sibling order is stable across runs. The trunk is always the root; its
    own `parent` field is ignored.

    Args:
        branch_map: Resolved branch records keyed by name
        trunk_name: Name of the trunk branch

    Returns:
        BranchTree rooted at the trunk, containing every branch exactly once

    Raises:
        TopologyError: If a parent is missing, the trunk is missing, a
            non-trunk branch has no parent, or parent links form a cycle
    """
    names = list(branch_map)
    index_by_name = {name: i for i, name in enumerate(names)}
    parent_indices: list[int | None] = [None] * len(names)
    child_indices: list[list[int]] = [[] for _ in names]

    for i, name in enumerate(names):
        if name == trunk_name:
            continue

        parent = branch_map[name].parent
        if not parent:
            continue

        parent_index = index_by_name.get(parent)
        if parent_index is None:
            raise TopologyError(f'Parent branch "{parent}" not found for "{name}"')

        parent_indices[i] = parent_index
        child_indices[parent_index].append(i)

    root_index = index_by_name.get(trunk_name)
    if root_index is None:
        available = ", ".join(names)
        raise TopologyError(
            f'Trunk branch "{trunk_name}" not found. Available branches: {available}'
        )

    orphans = [
        name for i, name in enumerate(names) if i != root_index and parent_indices[i] is None
    ]
    if orphans:
        raise TopologyError(
            f"Branches without a parent besides trunk \"{trunk_name}\": {', '.join(orphans)}"
        )

    # Every non-root node now has exactly one parent. Any node that cannot be
    # reached from the root sits on a parent cycle.
    reachable: set[int] = set()
    pending = [root_index]
    while pending:
        index = pending.pop()
        if index in reachable:
            continue
        reachable.add(index)
        pending.extend(child_indices[index])

    if len(reachable) != len(names):
        cyclic = [name for i, name in enumerate(names) if i not in reachable]
        raise TopologyError(f"Cycle detected in branch parents: {', '.join(cyclic)}")

    nodes = tuple(
        TreeNode(name=name, parent_index=parent_indices[i], child_indices=tuple(child_indices[i]))
        for i, name in enumerate(names)
    )
    logger.debug("Built tree rooted at %s with %d nodes", trunk_name, len(nodes))
    return BranchTree(nodes=nodes, root_index=root_index)


def flatten_branches(tree: BranchTree) -> list[BranchName]:
    """Return branch names in depth-first pre-order starting at the root.

    Raises:
        TopologyError: If a node is reached twice (shared child or cycle)
    """
    result: list[BranchName] = []
    visited: set[int] = set()
    pending = [tree.root_index]
    while pending:
        index = pending.pop()
        if index in visited:
            raise TopologyError(f'Branch "{tree.nodes[index].name}" reached twice in tree')
        visited.add(index)
        node = tree.nodes[index]
        result.append(node.name)
        pending.extend(reversed(node.child_indices))
    return result


def flatten_branch_map(branch_map: BranchMap, trunk_name: BranchName) -> list[BranchName]:
    """Pre-order listing computed directly from parent fields.

    Equivalent to flatten_branches(build_tree(...)) for valid maps, but works
    on unvalidated maps. Branches unreachable from the trunk are omitted.

    Raises:
        TopologyError: If the walk revisits a branch
    """
    if trunk_name not in branch_map:
        return []

    result: list[BranchName] = []
    visited: set[BranchName] = set()
    pending = [trunk_name]
    while pending:
        name = pending.pop()
        if name in visited:
            raise TopologyError(f'Cycle detected at branch "{name}"')
        visited.add(name)
        result.append(name)
        children = [child for child in children_of(branch_map, name) if child != trunk_name]
        pending.extend(reversed(children))
    return result


def walk_to_trunk(
    branch_map: BranchMap, branch_name: BranchName, trunk_name: BranchName
) -> list[BranchName]:
    """Return the chain from `branch_name` down to the trunk, branch first.

    The walk stops at the trunk, at a branch with no parent, or at a parent
    that is not in the map.

    Raises:
        TopologyError: If parent links loop back on themselves
    """
    chain: list[BranchName] = []
    visited: set[BranchName] = set()
    current = branch_map.get(branch_name)
    while current is not None:
        if current.name in visited:
            raise TopologyError(f'Cycle detected walking parents of "{branch_name}"')
        visited.add(current.name)
        chain.append(current.name)
        if current.name == trunk_name or not current.parent:
            break
        current = branch_map.get(current.parent)
    return chain
