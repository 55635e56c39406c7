"""Common GitLab models shared across domains."""

from __future__ import annotations

from .base import GitLabModel


class User(GitLabModel):
    id: int
    username: str = ""
    name: str = ""


class Namespace(GitLabModel):
    id: int
    name: str = ""
    path: str = ""
    full_path: str = ""


class PipelineRef(GitLabModel):
    id: int
    status: str = ""
    ref: str = ""
    web_url: str = ""
