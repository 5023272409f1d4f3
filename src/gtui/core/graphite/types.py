"""Pydantic models for Graphite's on-disk metadata files.

These mirror the JSON that `gt` persists inside the git directory:

- `.graphite_repo_config`: repository settings (trunk name)
- `.gt/snapshots/*.snapshot`: point-in-time branch topology
- `.graphite_pr_info`: cached pull request metadata

Field names are snake_case in Python and camelCase on disk. Unknown fields
are ignored so newer `gt` releases do not break parsing.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ValidationResult = Literal["VALID", "TRUNK", "BAD_PARENT_NAME"]
PRState = Literal["OPEN", "CLOSED", "MERGED"]
ReviewDecision = Literal["APPROVED", "REVIEW_REQUIRED", "CHANGES_REQUESTED"]


class _GraphiteModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class GraphiteTrunk(_GraphiteModel):
    name: str


class GraphiteRepoConfig(_GraphiteModel):
    """Contents of `.graphite_repo_config`."""

    trunk: str
    trunks: list[GraphiteTrunk] = Field(default_factory=list)


class GraphiteSubmittedVersion(_GraphiteModel):
    """Head/base pair recorded the last time a branch was submitted."""

    head_sha: str
    base_sha: str
    base_name: str


class GraphiteBranchData(_GraphiteModel):
    """Per-branch entry of a snapshot.

    `branch_revision` is usually a commit SHA, but gt sometimes stores a branch
    name there instead (see build_branch_map for how that is resolved).
    """

    children: list[str] = Field(default_factory=list)
    branch_revision: str
    validation_result: ValidationResult
    parent_branch_name: str | None = None
    parent_branch_revision: str | None = None
    last_submitted_version: GraphiteSubmittedVersion | None = None


class GraphiteSnapshot(_GraphiteModel):
    """Contents of a `.snapshot` file. Branch order is preserved from disk."""

    branches_hash: str | None = None
    branches: list[tuple[str, GraphiteBranchData]]
    current_branch_name: str


class GraphitePRVersion(_GraphiteModel):
    head_sha: str
    base_sha: str
    base_name: str
    created_at: str
    author_github_handle: str | None = None
    is_graphite_generated: bool = False


class GraphitePR(_GraphiteModel):
    """A single pull request as cached by gt."""

    pr_number: int
    title: str
    state: PRState
    review_decision: ReviewDecision | None = None
    head_ref_name: str
    base_ref_name: str
    is_draft: bool
    dependent_pr_number: int | None = None
    versions: list[GraphitePRVersion] = Field(default_factory=list)


class GraphitePRInfo(_GraphiteModel):
    """Contents of `.graphite_pr_info`."""

    pr_infos: list[GraphitePR] = Field(default_factory=list)
