"""Domain types for the resolved branch topology.

A GraphiteData value is the canonical snapshot handed to consumers. It is
built fresh on every ingestion and never mutated afterwards.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

UNKNOWN_COMMIT_HASH = "unknown"
UNKNOWN_PR_STATE = "UNKNOWN"

BranchName = str


@dataclass(frozen=True)
class CommitInfo:
    """A commit shown in the commits pane."""

    hash: str
    message: str
    patch: str = ""


@dataclass(frozen=True)
class BranchInfo:
    """Fully resolved metadata for one gt-tracked branch.

    Children are not stored here; use children_of() so they are always
    derived from the parent fields of the other records.
    """

    name: BranchName
    parent: BranchName  # "" when the branch has no parent (trunk)
    commits: tuple[CommitInfo, ...]
    pr_number: int = 0
    pr_state: str = UNKNOWN_PR_STATE
    submitted_version: int = 0
    remote_version: int = 0
    pr_title: str | None = None
    is_draft: bool = False

    @property
    def has_pr(self) -> bool:
        return self.pr_number > 0

    @property
    def needs_restack(self) -> bool:
        """True when the remote PR has versions the local branch has not submitted."""
        if self.pr_state in ("CLOSED", "MERGED"):
            return False
        return self.submitted_version < self.remote_version


BranchMap = dict[BranchName, BranchInfo]


def children_of(branch_map: BranchMap, name: BranchName) -> list[BranchName]:
    """Return the names of branches whose parent is `name`, in map order."""
    return [info.name for info in branch_map.values() if info.parent == name]


@dataclass(frozen=True)
class TreeNode:
    """A node in the branch arena. Links are indices into BranchTree.nodes."""

    name: BranchName
    parent_index: int | None
    child_indices: tuple[int, ...]


@dataclass(frozen=True)
class BranchTree:
    """Single-rooted branch tree stored as a flat arena of nodes."""

    nodes: tuple[TreeNode, ...]
    root_index: int
    _index_by_name: dict[BranchName, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_index_by_name", {node.name: i for i, node in enumerate(self.nodes)}
        )

    @property
    def root(self) -> TreeNode:
        return self.nodes[self.root_index]

    def __contains__(self, name: object) -> bool:
        return name in self._index_by_name

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.nodes)

    def node(self, name: BranchName) -> TreeNode | None:
        index = self._index_by_name.get(name)
        if index is None:
            return None
        return self.nodes[index]

    def parent_of(self, name: BranchName) -> BranchName | None:
        node = self.node(name)
        if node is None or node.parent_index is None:
            return None
        return self.nodes[node.parent_index].name

    def children_of(self, name: BranchName) -> list[BranchName]:
        node = self.node(name)
        if node is None:
            return []
        return [self.nodes[i].name for i in node.child_indices]

    def names(self) -> list[BranchName]:
        return [node.name for node in self.nodes]


@dataclass(frozen=True)
class GraphiteData:
    """Everything a viewer needs from one ingestion pass."""

    trunk_name: BranchName
    current_branch: BranchName
    branch_map: BranchMap
    tree: BranchTree

    def commits_for(self, name: BranchName | None) -> tuple[CommitInfo, ...]:
        if name is None:
            return ()
        info = self.branch_map.get(name)
        if info is None:
            return ()
        return info.commits
