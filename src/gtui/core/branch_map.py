"""Resolve a Graphite snapshot and PR cache into a flat branch map."""

import logging

from gtui.core.graphite.types import (
    GraphiteBranchData,
    GraphitePR,
    GraphitePRInfo,
    GraphiteSnapshot,
)
from gtui.core.types import (
    UNKNOWN_COMMIT_HASH,
    UNKNOWN_PR_STATE,
    BranchInfo,
    BranchMap,
    CommitInfo,
)

logger = logging.getLogger(__name__)

HEAD_SENTINEL = "HEAD"
SHORT_HASH_LENGTH = 8


def create_commit_info(commit_hash: str, branch_name: str) -> CommitInfo:
    """Build a CommitInfo, shortening real hashes to SHORT_HASH_LENGTH characters."""
    if commit_hash == UNKNOWN_COMMIT_HASH:
        return CommitInfo(hash=UNKNOWN_COMMIT_HASH, message=f"Branch {branch_name}")

    return CommitInfo(hash=commit_hash[:SHORT_HASH_LENGTH], message=f"Commit on {branch_name}")


def index_prs_by_head_branch(pr_info: GraphitePRInfo) -> dict[str, GraphitePR]:
    """Map head branch name to PR. Later entries win on duplicate head branches."""
    lookup: dict[str, GraphitePR] = {}
    for pr in pr_info.pr_infos:
        if pr.head_ref_name in lookup:
            logger.debug("Duplicate PR for branch %s, using #%d", pr.head_ref_name, pr.pr_number)
        lookup[pr.head_ref_name] = pr
    return lookup


def resolve_commit_hashes(branch_data: GraphiteBranchData, all_branch_names: set[str]) -> list[str]:
    """Determine the commit hashes to show for a branch.

    gt sometimes stores a branch name (or the parent's name) in
    `branchRevision` rather than a SHA. Those are treated as references and
    replaced by HEAD_SENTINEL, which is then filtered out.

    This is a heuristic: a real SHA that happens to equal a branch name is
    misclassified as a reference.
    """
    if branch_data.last_submitted_version is not None:
        candidates = [branch_data.last_submitted_version.head_sha]
    else:
        revision = branch_data.branch_revision
        is_branch_reference = (
            revision in all_branch_names or revision == branch_data.parent_branch_name
        )
        candidates = [HEAD_SENTINEL if is_branch_reference else revision]

    return [
        commit_hash
        for commit_hash in candidates
        if commit_hash not in all_branch_names
        and commit_hash != HEAD_SENTINEL
        and commit_hash != branch_data.parent_branch_name
    ]


def build_branch_map(snapshot: GraphiteSnapshot, pr_info: GraphitePRInfo) -> BranchMap:
    """Combine a topology snapshot and PR cache into a BranchMap.

    The returned dict preserves snapshot order, which determines sibling order
    in the tree. Every branch has at least one commit; branches without a
    resolvable hash get a single placeholder commit.

    Args:
        snapshot: Validated snapshot contents
        pr_info: Validated PR cache contents

    Returns:
        Mapping of branch name to resolved BranchInfo
    """
    pr_lookup = index_prs_by_head_branch(pr_info)
    all_branch_names = {name for name, _ in snapshot.branches}

    branch_map: BranchMap = {}
    for branch_name, branch_data in snapshot.branches:
        hashes = resolve_commit_hashes(branch_data, all_branch_names)
        commits = tuple(create_commit_info(h, branch_name) for h in hashes)
        if not commits:
            commits = (create_commit_info(UNKNOWN_COMMIT_HASH, branch_name),)

        pr = pr_lookup.get(branch_name)
        if pr is None:
            info = BranchInfo(
                name=branch_name,
                parent=branch_data.parent_branch_name or "",
                commits=commits,
                pr_state=UNKNOWN_PR_STATE,
            )
        else:
            # gt does not record which version was submitted locally, so both
            # counts come from the PR's version history.
            version_count = len(pr.versions)
            info = BranchInfo(
                name=branch_name,
                parent=branch_data.parent_branch_name or "",
                commits=commits,
                pr_number=pr.pr_number,
                pr_state=pr.state,
                submitted_version=version_count,
                remote_version=version_count,
                pr_title=pr.title,
                is_draft=pr.is_draft,
            )

        if branch_name in branch_map:
            logger.debug("Duplicate snapshot entry for %s, keeping the last one", branch_name)
        branch_map[branch_name] = info

    logger.debug("Built branch map with %d branches", len(branch_map))
    return branch_map
