"""GitLab CI monitor exceptions."""

from __future__ import annotations


class GitLabError(Exception):
    """Base exception for GitLab operations."""


class GitLabApiError(GitLabError):
    """Raised when the GitLab API returns a non-success response."""

    def __init__(self, status_code: int, status_text: str, body: str = "") -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(f"GitLab API Error {status_code} {status_text}: {body}")


class GitLabAuthError(GitLabApiError):
    """Raised on 401/403 authentication failures."""

    def __init__(self, status_code: int, body: str = "") -> None:
        status_text = "Unauthorized" if status_code == 401 else "Forbidden"
        super().__init__(status_code, status_text, body)


class GitLabNotFoundError(GitLabApiError):
    """Raised on 404 responses."""

    def __init__(self, body: str = "") -> None:
        super().__init__(404, "Not Found", body)


class ResolutionError(GitLabError):
    """Raised when a branch or merge request cannot be mapped to a pipeline."""


class PipelineStateError(GitLabError):
    """Raised when a pipeline lacks a timestamp its status requires."""

    def __init__(self, pipeline_id: int, status: str, field: str) -> None:
        self.pipeline_id = pipeline_id
        self.status = status
        self.field = field
        super().__init__(f"Pipeline {pipeline_id} is {status!r} but has no {field}")


class GitError(GitLabError):
    """Raised when a local git query fails."""
