"""Pydantic models for JSON output of `gtui branches --json`."""

from pydantic import BaseModel, ConfigDict

from gtui.core.types import GraphiteData


class CommitJson(BaseModel):
    model_config = ConfigDict(strict=True)

    hash: str
    message: str


class BranchJson(BaseModel):
    """One branch in pre-order position.

    Attributes:
        name: Branch name
        parent: Parent branch name, or None for the trunk
        children: Child branch names in tree order
        depth: Distance from the trunk
        is_current: Whether this branch is checked out
        pr_number: PR number, or None if the branch has no PR
        pr_state: PR state ("OPEN", "CLOSED", "MERGED", "UNKNOWN")
        commits: Resolved commits
    """

    model_config = ConfigDict(strict=True)

    name: str
    parent: str | None
    children: list[str]
    depth: int
    is_current: bool
    pr_number: int | None
    pr_state: str
    commits: list[CommitJson]


class BranchesResponse(BaseModel):
    model_config = ConfigDict(strict=True)

    trunk: str
    current_branch: str
    branches: list[BranchJson]


def build_branches_response(data: GraphiteData, ordered_names: list[str]) -> BranchesResponse:
    depths: dict[str, int] = {}
    branches: list[BranchJson] = []
    for name in ordered_names:
        info = data.branch_map[name]
        parent = data.tree.parent_of(name)
        depth = depths[parent] + 1 if parent is not None else 0
        depths[name] = depth
        branches.append(
            BranchJson(
                name=name,
                parent=parent,
                children=data.tree.children_of(name),
                depth=depth,
                is_current=name == data.current_branch,
                pr_number=info.pr_number if info.has_pr else None,
                pr_state=info.pr_state,
                commits=[CommitJson(hash=c.hash, message=c.message) for c in info.commits],
            )
        )
    return BranchesResponse(
        trunk=data.trunk_name, current_branch=data.current_branch, branches=branches
    )
