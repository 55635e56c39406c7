"""Pipeline and job models."""

from __future__ import annotations

from datetime import datetime

from pydantic import field_validator

from .base import GitLabModel
from .common import PipelineRef, User


class Pipeline(GitLabModel):
    id: int
    iid: int = 0
    status: str = ""
    ref: str = ""
    sha: str = ""
    web_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None
    duration: int | None = None
    queued_duration: float | None = None
    source: str = ""
    user: User | None = None


class Job(GitLabModel):
    id: int
    name: str = ""
    stage: str = ""
    status: str = ""
    ref: str = ""
    pipeline: PipelineRef | None = None
    created_at: datetime | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None
    duration: float | None = None
    web_url: str = ""
    allow_failure: bool = False
    failure_reason: str | None = None

    @field_validator("name", "stage", mode="before")
    @classmethod
    def _none_as_blank(cls, value: str | None) -> str:
        return "" if value is None else value
