"""Shared test fixtures for gitlab-ci-monitor."""

from __future__ import annotations

from typing import Any

import pytest
import respx

from gitlab_ci_monitor.client import GitLabClient
from gitlab_ci_monitor.config import GitLabConfig

TEST_URL = "https://gitlab.example.com"
TEST_TOKEN = "test-token"
API = f"{TEST_URL}/api/v4"
QUEUED = ("created", "waiting_for_resource", "preparing", "pending")


@pytest.fixture
def config() -> GitLabConfig:
    return GitLabConfig(url=TEST_URL, token=TEST_TOKEN)


@pytest.fixture
def client(config: GitLabConfig) -> GitLabClient:
    return GitLabClient(config)


@pytest.fixture
def mock_api() -> respx.MockRouter:
    with respx.mock(base_url=API, assert_all_called=False) as router:
        yield router


@pytest.fixture
def job_data():
    """Build a job payload shaped like GitLab's ``/pipelines/:id/jobs`` items."""

    def make(
        job_id: int, name: str, stage: str = "test", status: str = "success", pipeline_id: int = 7
    ) -> dict[str, Any]:
        return {
            "id": job_id,
            "name": name,
            "stage": stage,
            "status": status,
            "pipeline": {"id": pipeline_id, "status": "running"},
        }

    return make


@pytest.fixture
def pipeline_data():
    """Build a pipeline payload; timestamps match the status unless overridden."""

    def make(status: str, pipeline_id: int = 7, **extra: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": pipeline_id,
            "status": status,
            "created_at": "2024-03-01T10:00:00Z",
        }
        if status not in QUEUED:
            data["started_at"] = "2024-03-01T10:00:05Z"
        if status not in (*QUEUED, "running"):
            data["finished_at"] = "2024-03-01T10:02:10Z"
            data["duration"] = 125
        data.update(extra)
        return data

    return make
