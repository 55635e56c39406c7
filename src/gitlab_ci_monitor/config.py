"""GitLab CI monitor configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class GitLabConfig:
    """Connection settings for the GitLab API, loaded from environment variables."""

    url: str = ""
    token: str = ""
    timeout: int = 30
    ssl_verify: bool = True
    poll_interval: float = 5.0

    @classmethod
    def from_env(cls) -> GitLabConfig:
        url = os.getenv("GITLAB_URL", "").rstrip("/")
        token = (
            os.getenv("GITLAB_TOKEN")
            or os.getenv("GITLAB_PAT")
            or os.getenv("GITLAB_PERSONAL_ACCESS_TOKEN")
            or os.getenv("GITLAB_API_TOKEN", "")
        )
        timeout = int(os.getenv("GITLAB_TIMEOUT", "30"))
        ssl_verify = os.getenv("GITLAB_SSL_VERIFY", "true").lower() not in (
            "false",
            "0",
            "no",
        )
        poll_interval = float(os.getenv("GITLAB_POLL_INTERVAL", "5"))

        return cls(
            url=url,
            token=token,
            timeout=timeout,
            ssl_verify=ssl_verify,
            poll_interval=poll_interval,
        )

    @property
    def api_url(self) -> str:
        return f"{self.url}/api/v4"

    def validate(self) -> None:
        if not self.url:
            msg = "GITLAB_URL environment variable is required"
            raise ValueError(msg)
        if not self.token:
            msg = (
                "GitLab token is required. Set one of: GITLAB_TOKEN, GITLAB_PAT, "
                "GITLAB_PERSONAL_ACCESS_TOKEN, or GITLAB_API_TOKEN"
            )
            raise ValueError(msg)
        if self.poll_interval < 0:
            msg = "GITLAB_POLL_INTERVAL must not be negative"
            raise ValueError(msg)


@dataclass(frozen=True)
class StatusOptions:
    """Display and polling switches for one ``status`` invocation."""

    wait: bool = False
    no_skipped: bool = False
    only_failures: bool = False
    no_created: bool = False
    summary_only: bool = False
    color: bool = False
    poll_interval: float = 0.0
