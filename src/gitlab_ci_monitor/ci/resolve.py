"""Map a project path plus branch or merge request reference to a pipeline."""

from __future__ import annotations

import re
from dataclasses import dataclass

from loguru import logger

from ..client import GitLabClient
from ..exceptions import GitLabNotFoundError, ResolutionError
from ..models.merge_requests import MergeRequest
from ..models.projects import Project

# Matches:  "!42" or "42"
_MR_REF_RE = re.compile(r"^!?(\d+)$")


@dataclass(frozen=True)
class Target:
    project_id: int
    project_path: str
    pipeline_id: int
    merge_request_iid: int | None = None


def parse_mr_ref(ref: str) -> int | None:
    """Return the merge request IID if *ref* names one, else None."""
    m = _MR_REF_RE.match(ref.strip())
    return int(m.group(1)) if m else None


async def resolve_project(client: GitLabClient, project_path: str) -> Project:
    try:
        return Project.model_validate(await client.get_project(project_path))
    except GitLabNotFoundError as e:
        msg = f"Project {project_path} not found"
        raise ResolutionError(msg) from e


async def _merge_request(client: GitLabClient, project: Project, iid: int) -> MergeRequest:
    try:
        data = await client.get_merge_request(project.id, iid)
    except GitLabNotFoundError as e:
        msg = f"Merge request !{iid} not found in {project.path_with_namespace}"
        raise ResolutionError(msg) from e
    return MergeRequest.model_validate(data)


async def resolve_target(client: GitLabClient, project_path: str, ref: str) -> Target:
    """Find the pipeline to report on for *ref*.

    ``!<iid>`` or a bare number selects a merge request's head pipeline. A
    branch name selects the head pipeline of its open merge request, falling
    back to the newest pipeline run for the branch itself.
    """
    project = await resolve_project(client, project_path)

    iid = parse_mr_ref(ref)
    if iid is not None:
        mr = await _merge_request(client, project, iid)
        if mr.pipeline_id is None:
            msg = f"Merge request !{iid} has no pipeline"
            raise ResolutionError(msg)
        return Target(project.id, project.path_with_namespace, mr.pipeline_id, iid)

    mrs = await client.list_merge_requests(
        project.id,
        {"source_branch": ref, "state": "opened", "order_by": "updated_at", "per_page": 1},
    )
    if mrs:
        mr = await _merge_request(client, project, mrs[0]["iid"])
        if mr.pipeline_id is not None:
            logger.debug("branch {} -> merge request !{}", ref, mr.iid)
            return Target(project.id, project.path_with_namespace, mr.pipeline_id, mr.iid)

    pipelines = await client.list_pipelines(
        project.id, {"ref": ref, "order_by": "id", "sort": "desc", "per_page": 1}
    )
    if not pipelines:
        msg = f"No pipeline found for {ref} in {project.path_with_namespace}"
        raise ResolutionError(msg)
    logger.debug("branch {} -> latest pipeline {}", ref, pipelines[0]["id"])
    return Target(project.id, project.path_with_namespace, pipelines[0]["id"])
