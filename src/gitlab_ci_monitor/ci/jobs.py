"""Job slot deduplication and job restarts."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from ..client import GitLabClient
from ..models.pipelines import Job


def job_slot(job: Job) -> tuple[str, str] | int:
    """Return the (stage, name) slot a job occupies.

    Records missing a stage or name cannot be matched with their retries, so
    each one becomes a slot of its own keyed by its id.
    """
    if not job.stage or not job.name:
        return job.id
    return job.stage, job.name


def latest_jobs(jobs: Iterable[Job]) -> list[Job]:
    """Keep only the highest-id job in each slot.

    Slots are returned in the order they first appear in *jobs*.
    """
    latest: dict[tuple[str, str] | int, Job] = {}
    for job in jobs:
        slot = job_slot(job)
        current = latest.get(slot)
        if current is None or job.id > current.id:
            latest[slot] = job
    return list(latest.values())


async def play_or_retry(client: GitLabClient, project_id: str | int, job_id: int) -> Job:
    """Start a job again: manual jobs are played, anything else is retried."""
    job = Job.model_validate(await client.get_job(project_id, job_id))
    if job.status == "manual":
        logger.debug("playing manual job {}", job.id)
        data = await client.play_job(project_id, job.id)
    else:
        logger.debug("retrying {} job {}", job.status, job.id)
        data = await client.retry_job(project_id, job.id)
    return Job.model_validate(data)
