"""Project models."""

from __future__ import annotations

from .base import GitLabModel
from .common import Namespace


class Project(GitLabModel):
    id: int
    name: str = ""
    path: str = ""
    path_with_namespace: str = ""
    default_branch: str = ""
    web_url: str = ""
    namespace: Namespace | None = None
