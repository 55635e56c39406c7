"""Fetch, render and optionally poll a pipeline until it finishes."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from enum import Enum
from typing import TextIO

import click
from loguru import logger

from ..client import GitLabClient
from ..config import StatusOptions
from ..models.pipelines import Job, Pipeline
from .jobs import latest_jobs
from .render import Renderer, renderer_for
from .report import format_jobs, pipeline_status
from .status import is_active


class State(Enum):
    FETCHING = "fetching"
    RENDERING = "rendering"
    WAITING = "waiting"
    DONE = "done"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PipelineMonitor:
    """Drives the fetch -> render -> wait loop for one pipeline.

    Every network call is awaited in turn and errors propagate unchanged; the
    caller decides how to report them.
    """

    def __init__(
        self,
        client: GitLabClient,
        project_id: str | int,
        options: StatusOptions,
        *,
        renderer: Renderer | None = None,
        out: TextIO | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.client = client
        self.project_id = project_id
        self.options = options
        self.renderer = renderer or renderer_for(options)
        self.out = out if out is not None else sys.stdout
        self._sleep = sleep
        self._clock = clock
        self.state = State.FETCHING
        self.jobs: list[Job] = []
        self.pipeline: Pipeline | None = None
        self._rendered = False

    def _write(self, text: str) -> None:
        click.echo(text, file=self.out, nl=False, color=self.options.color)

    async def _fetch_jobs(self, pipeline_id: int) -> list[Job]:
        raw = await self.client.list_pipeline_jobs(self.project_id, pipeline_id)
        jobs = latest_jobs(Job.model_validate(item) for item in raw)
        logger.debug("pipeline {}: {} job(s), {} after dedup", pipeline_id, len(raw), len(jobs))
        return jobs

    async def _fetch_pipeline(self, pipeline_id: int) -> Pipeline:
        pipeline = Pipeline.model_validate(
            await self.client.get_pipeline(self.project_id, pipeline_id)
        )
        logger.debug("pipeline {} is {}", pipeline.id, pipeline.status)
        return pipeline

    async def _step(self, pipeline_id: int) -> int:
        """Advance the state machine once and return the pipeline id to follow."""
        if self.state is State.FETCHING:
            jobs = await self._fetch_jobs(pipeline_id)
            if not jobs and self.pipeline is None:
                logger.debug("pipeline {} has no jobs", pipeline_id)
                self.state = State.DONE
                return pipeline_id
            if jobs:
                self.jobs = jobs
                if jobs[0].pipeline is not None:
                    pipeline_id = jobs[0].pipeline.id
            self.pipeline = await self._fetch_pipeline(pipeline_id)
            self.state = State.RENDERING
        elif self.state is State.RENDERING:
            lines = format_jobs(
                self.jobs, self.options, self.renderer, header=not self._rendered
            )
            self._rendered = True
            self._write("".join(f"{line}\n" for line in lines))
            if self.options.wait and is_active(self.pipeline.status):
                self.state = State.WAITING
            else:
                self.state = State.DONE
        elif self.state is State.WAITING:
            self._write("\n")
            if self.options.poll_interval > 0:
                await self._sleep(self.options.poll_interval)
            self.state = State.FETCHING
        return pipeline_id

    async def run(self, pipeline_id: int) -> int:
        """Report on *pipeline_id* and return the process exit code."""
        try:
            while self.state is not State.DONE:
                pipeline_id = await self._step(pipeline_id)
            if self.pipeline is None:
                return 0
            self._write(pipeline_status(self.pipeline, self.jobs, self.renderer, self._clock()))
            if self.options.wait and self.pipeline.status != "success":
                return 1
            return 0
        finally:
            self.out.flush()
