"""Merge request models."""

from __future__ import annotations

from .base import GitLabModel
from .common import PipelineRef, User


class MergeRequest(GitLabModel):
    id: int
    iid: int
    title: str = ""
    state: str = ""
    source_branch: str = ""
    target_branch: str = ""
    author: User | None = None
    sha: str = ""
    web_url: str = ""
    pipeline: PipelineRef | None = None
    head_pipeline: PipelineRef | None = None

    @property
    def pipeline_id(self) -> int | None:
        """The head pipeline when GitLab reports one, else the MR's last pipeline."""
        ref = self.head_pipeline or self.pipeline
        return ref.id if ref else None
