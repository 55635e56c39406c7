"""Tests for GitLab API client."""

from __future__ import annotations

import httpx
import pytest
import respx

from gitlab_ci_monitor.client import GitLabClient
from gitlab_ci_monitor.config import GitLabConfig
from gitlab_ci_monitor.exceptions import GitLabApiError, GitLabAuthError, GitLabNotFoundError

BASE = "https://gitlab.example.com/api/v4"


def _make_client() -> GitLabClient:
    return GitLabClient(GitLabConfig(url="https://gitlab.example.com", token="test-token"))


class TestEncodeId:
    def test_numeric_string(self):
        assert GitLabClient._encode_id("123") == "123"

    def test_integer(self):
        assert GitLabClient._encode_id(123) == "123"

    def test_path(self):
        assert GitLabClient._encode_id("my-group/my-project") == "my-group%2Fmy-project"


class TestRequest:
    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError, match="GITLAB_URL"):
            GitLabClient(GitLabConfig(url="", token="x"))

    @pytest.mark.asyncio
    async def test_get_project(self):
        async with respx.mock(base_url=BASE) as router:
            route = router.get("/projects/123").mock(
                return_value=httpx.Response(200, json={"id": 123, "name": "test"})
            )
            client = _make_client()
            result = await client.get_project(123)
            assert result["id"] == 123
            assert route.calls[0].request.headers["PRIVATE-TOKEN"] == "test-token"

    @pytest.mark.asyncio
    async def test_auth_error_401(self):
        async with respx.mock(base_url=BASE) as router:
            router.get("/projects/123").mock(return_value=httpx.Response(401, text="Unauthorized"))
            client = _make_client()
            with pytest.raises(GitLabAuthError) as exc_info:
                await client.get_project(123)
            assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_not_found_error(self):
        async with respx.mock(base_url=BASE) as router:
            router.get("/projects/999/pipelines/1").mock(
                return_value=httpx.Response(404, text="Not Found")
            )
            client = _make_client()
            with pytest.raises(GitLabNotFoundError):
                await client.get_pipeline(999, 1)

    @pytest.mark.asyncio
    async def test_server_error(self):
        async with respx.mock(base_url=BASE) as router:
            router.get("/projects/123/pipelines/7").mock(
                return_value=httpx.Response(502, text="Bad Gateway")
            )
            client = _make_client()
            with pytest.raises(GitLabApiError) as exc_info:
                await client.get_pipeline(123, 7)
            assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_html_response_error(self):
        async with respx.mock(base_url=BASE) as router:
            router.get("/projects/123").mock(
                return_value=httpx.Response(
                    200,
                    text="<html><body>Login</body></html>",
                    headers={"content-type": "text/html"},
                )
            )
            client = _make_client()
            with pytest.raises(GitLabApiError, match="HTML"):
                await client.get_project(123)

    @pytest.mark.asyncio
    async def test_path_encoding(self):
        async with respx.mock(base_url=BASE) as router:
            route = router.get("/projects/my-group%2Fmy-project").mock(
                return_value=httpx.Response(200, json={"id": 1})
            )
            client = _make_client()
            await client.get_project("my-group/my-project")
            assert route.called


class TestPagination:
    @pytest.mark.asyncio
    async def test_pipeline_jobs_follow_next_page(self):
        async with respx.mock(base_url=BASE) as router:
            route = router.get("/projects/123/pipelines/7/jobs").mock(
                side_effect=[
                    httpx.Response(200, json=[{"id": 1}, {"id": 2}], headers={"X-Next-Page": "2"}),
                    httpx.Response(200, json=[{"id": 3}], headers={"X-Next-Page": ""}),
                ]
            )
            client = _make_client()
            result = await client.list_pipeline_jobs(123, 7)
            assert [j["id"] for j in result] == [1, 2, 3]
            assert route.call_count == 2
            assert route.calls[0].request.url.params["page"] == "1"
            assert route.calls[1].request.url.params["page"] == "2"
            assert route.calls[1].request.url.params["per_page"] == "100"

    @pytest.mark.asyncio
    async def test_single_page_without_header(self):
        async with respx.mock(base_url=BASE) as router:
            route = router.get("/projects/123/pipelines/7/jobs").mock(
                return_value=httpx.Response(200, json=[{"id": 1}])
            )
            client = _make_client()
            result = await client.list_pipeline_jobs(123, 7)
            assert len(result) == 1
            assert route.call_count == 1

    @pytest.mark.asyncio
    async def test_error_on_later_page_propagates(self):
        async with respx.mock(base_url=BASE) as router:
            router.get("/projects/123/pipelines/7/jobs").mock(
                side_effect=[
                    httpx.Response(200, json=[{"id": 1}], headers={"X-Next-Page": "2"}),
                    httpx.Response(500, text="boom"),
                ]
            )
            client = _make_client()
            with pytest.raises(GitLabApiError):
                await client.list_pipeline_jobs(123, 7)


class TestJobs:
    @pytest.mark.asyncio
    async def test_retry_job(self):
        async with respx.mock(base_url=BASE) as router:
            route = router.post("/projects/123/jobs/9/retry").mock(
                return_value=httpx.Response(201, json={"id": 10, "status": "pending"})
            )
            client = _make_client()
            result = await client.retry_job(123, 9)
            assert result["id"] == 10
            assert route.called

    @pytest.mark.asyncio
    async def test_play_job(self):
        async with respx.mock(base_url=BASE) as router:
            route = router.post("/projects/123/jobs/9/play").mock(
                return_value=httpx.Response(200, json={"id": 9, "status": "pending"})
            )
            client = _make_client()
            await client.play_job(123, 9)
            assert route.called
