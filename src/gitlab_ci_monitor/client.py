"""GitLab API client using httpx."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from .config import GitLabConfig
from .exceptions import GitLabApiError, GitLabAuthError, GitLabNotFoundError


class GitLabClient:
    """Async HTTP client for the slice of the GitLab REST API v4 used by the monitor."""

    def __init__(self, config: GitLabConfig | None = None) -> None:
        self.config = config or GitLabConfig.from_env()
        self.config.validate()
        self._client = httpx.AsyncClient(
            base_url=self.config.api_url,
            headers={
                "PRIVATE-TOKEN": self.config.token,
                "Content-Type": "application/json",
            },
            timeout=self.config.timeout,
            verify=self.config.ssl_verify,
        )

    async def close(self) -> None:
        await self._client.aclose()

    # ── HTTP helpers ──────────────────────────────────────────────

    @staticmethod
    def _encode_id(project_id: str | int) -> str:
        """Encode a project ID. Numeric IDs pass through; paths are URL-encoded."""
        if isinstance(project_id, int):
            return str(project_id)
        try:
            return str(int(project_id))
        except ValueError:
            return quote(project_id, safe="")

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json_data: Any = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a request and raise the matching GitLab error on failure."""
        kwargs: dict[str, Any] = {"params": params}
        if json_data is not None:
            kwargs["json"] = json_data

        resp = await self._client.request(method, path, **kwargs)
        logger.debug("{} {} -> {}", method, path, resp.status_code)

        if resp.status_code in (401, 403):
            raise GitLabAuthError(resp.status_code, resp.text)
        if resp.status_code == 404:
            raise GitLabNotFoundError(resp.text)
        if not resp.is_success:
            raise GitLabApiError(resp.status_code, resp.reason_phrase or "", resp.text)
        return resp

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        if resp.status_code == 204 or not resp.content:
            return None

        content_type = resp.headers.get("content-type", "")
        if "text/html" in content_type:
            msg = "Unexpected HTML response — check URL and authentication"
            raise GitLabApiError(resp.status_code, msg, resp.text[:500])

        try:
            return resp.json()
        except json.JSONDecodeError as e:
            raise GitLabApiError(
                resp.status_code,
                f"JSON parse error: {e}",
                resp.text[:500],
            ) from e

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_data: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an API request and return parsed JSON."""
        resp = await self._send(method, path, json_data=json_data, params=params)
        return self._decode(resp)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json_data: Any = None) -> Any:
        return await self._request("POST", path, json_data=json_data)

    async def get_all(self, path: str, params: dict[str, Any] | None = None) -> list[dict]:
        """Fetch every page of a list endpoint, one page at a time.

        Follows the ``X-Next-Page`` header until GitLab reports no further page.
        """
        p: dict[str, Any] = {"per_page": 100, **(params or {})}
        items: list[dict] = []
        page = str(p.pop("page", 1))
        while page:
            resp = await self._send("GET", path, params={**p, "page": page})
            batch = self._decode(resp) or []
            items.extend(batch)
            logger.debug("{} page {}: {} item(s)", path, page, len(batch))
            page = resp.headers.get("x-next-page", "").strip()
        return items

    # ── Projects ──────────────────────────────────────────────────

    async def get_project(self, project_id: str | int) -> dict:
        enc = self._encode_id(project_id)
        return await self.get(f"/projects/{enc}")

    # ── Merge Requests ────────────────────────────────────────────

    async def list_merge_requests(
        self, project_id: str | int, params: dict[str, Any] | None = None
    ) -> list[dict]:
        enc = self._encode_id(project_id)
        p = {"per_page": 20, **(params or {})}
        return await self.get(f"/projects/{enc}/merge_requests", params=p)

    async def get_merge_request(self, project_id: str | int, mr_iid: int) -> dict:
        enc = self._encode_id(project_id)
        return await self.get(f"/projects/{enc}/merge_requests/{mr_iid}")

    # ── Pipelines ─────────────────────────────────────────────────

    async def list_pipelines(
        self, project_id: str | int, params: dict[str, Any] | None = None
    ) -> list[dict]:
        enc = self._encode_id(project_id)
        p = {"per_page": 20, **(params or {})}
        return await self.get(f"/projects/{enc}/pipelines", params=p)

    async def get_pipeline(self, project_id: str | int, pipeline_id: int) -> dict:
        enc = self._encode_id(project_id)
        return await self.get(f"/projects/{enc}/pipelines/{pipeline_id}")

    async def list_pipeline_jobs(self, project_id: str | int, pipeline_id: int) -> list[dict]:
        enc = self._encode_id(project_id)
        return await self.get_all(f"/projects/{enc}/pipelines/{pipeline_id}/jobs")

    # ── Jobs ──────────────────────────────────────────────────────

    async def get_job(self, project_id: str | int, job_id: int) -> dict:
        enc = self._encode_id(project_id)
        return await self.get(f"/projects/{enc}/jobs/{job_id}")

    async def retry_job(self, project_id: str | int, job_id: int) -> dict:
        enc = self._encode_id(project_id)
        return await self.post(f"/projects/{enc}/jobs/{job_id}/retry")

    async def play_job(self, project_id: str | int, job_id: int) -> dict:
        enc = self._encode_id(project_id)
        return await self.post(f"/projects/{enc}/jobs/{job_id}/play")
