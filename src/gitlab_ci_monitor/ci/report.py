"""Plain-text report of a pipeline and its jobs."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import NamedTuple

from ..config import StatusOptions
from ..exceptions import PipelineStateError
from ..models.pipelines import Job, Pipeline
from .render import Renderer
from .status import TERMINAL_STATUSES, classify, is_visible

STATUS_WIDTH = 10


class JobSummary(NamedTuple):
    total: int
    passed: int
    failed: int
    queued: int


# ── Job table ─────────────────────────────────────────────────────


def column_widths(jobs: Sequence[Job]) -> tuple[int, int]:
    """Widest stage and name over every job, filtered or not."""
    stage_width = max((len(job.stage) for job in jobs), default=0)
    name_width = max((len(job.name) for job in jobs), default=0)
    return stage_width, name_width


def format_header(stage_width: int, name_width: int) -> str:
    return f"{'Stage':>{stage_width}}: {'Name':<{name_width}} - {'Status':>{STATUS_WIDTH}}"


def format_job(job: Job, stage_width: int, name_width: int, renderer: Renderer) -> str:
    line = (
        f"{job.stage:>{stage_width}}: {job.name:<{name_width}} - "
        f"{job.status:>{STATUS_WIDTH}} id: {job.id}"
    )
    return renderer.style(line, classify(job.status).style)


def format_jobs(
    jobs: Sequence[Job], options: StatusOptions, renderer: Renderer, *, header: bool = True
) -> list[str]:
    """Optional header plus one line per visible job; nothing at all in summary mode."""
    if options.summary_only:
        return []
    stage_width, name_width = column_widths(jobs)
    lines = [format_header(stage_width, name_width)] if header else []
    lines.extend(
        format_job(job, stage_width, name_width, renderer)
        for job in jobs
        if is_visible(job.status, options)
    )
    return lines


# ── Summary ───────────────────────────────────────────────────────


def job_summary(jobs: Sequence[Job]) -> JobSummary:
    statuses = [job.status for job in jobs]
    return JobSummary(
        total=len(statuses),
        passed=statuses.count("success"),
        failed=statuses.count("failed"),
        queued=statuses.count("created"),
    )


def align_columns(rows: Sequence[Sequence[str]], padding: int = 1, min_width: int = 2) -> list[str]:
    """Pad every cell but the last in each row to its column's width."""
    widths: list[int] = []
    for row in rows:
        for i, cell in enumerate(row[:-1]):
            width = max(len(cell) + padding, min_width)
            if i < len(widths):
                widths[i] = max(widths[i], width)
            else:
                widths.append(width)
    lines = []
    for row in rows:
        cells = [cell.ljust(widths[i]) for i, cell in enumerate(row[:-1])]
        lines.append("".join(cells) + (row[-1] if row else ""))
    return lines


def format_summary(summary: JobSummary) -> str:
    return "\n".join(align_columns([list(summary._fields), [str(n) for n in summary]]))


# ── Time ──────────────────────────────────────────────────────────


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def pluralize(noun: str, quantity: int) -> str:
    if quantity == 0:
        return ""
    if quantity == 1:
        return f"1 {noun}"
    return f"{quantity} {noun}s"


def since_message(moment: datetime, now: datetime) -> str:
    """Relative age of *moment*, using the two most significant units.

    Returns an empty string when both units round down to zero.
    """
    elapsed = max(int((_aware(now) - _aware(moment)).total_seconds()), 0)
    minutes, hours = elapsed // 60, elapsed // 3600
    if hours < 1:
        parts = (pluralize("minute", minutes), pluralize("second", elapsed % 60))
    elif hours < 24:
        parts = (pluralize("hour", hours), pluralize("minute", minutes % 60))
    else:
        parts = (pluralize("day", hours // 24), pluralize("hour", hours % 24))
    joined = ", ".join(part for part in parts if part)
    return f"({joined} ago)" if joined else ""


def layout_time(when: datetime, now: datetime) -> str:
    """Clock time for today's recent moments, a date stamp otherwise."""
    local, local_now = _aware(when).astimezone(), _aware(now).astimezone()
    recent = (local_now - local).total_seconds() < 12 * 3600
    if recent and local.date() == local_now.date():
        hour = local.hour % 12 or 12
        meridiem = "AM" if local.hour < 12 else "PM"
        stamp = f"{hour}:{local.minute:02d}{meridiem}"
    else:
        stamp = f"{local:%b} {local.day:>2} {local:%H:%M:%S}"
    return " ".join(part for part in (stamp, since_message(when, now)) if part)


def format_duration(seconds: int) -> str:
    hours = seconds // 3600
    minutes = seconds // 60 - hours * 60
    secs = seconds % 60
    if hours > 0:
        return f"{hours}.{minutes}:{secs}"
    if minutes > 0:
        return f"{minutes}:{secs}"
    return f"{seconds} secs"


def _required(pipeline: Pipeline, field: str) -> datetime:
    value = getattr(pipeline, field)
    if value is None:
        raise PipelineStateError(pipeline.id, pipeline.status, field)
    return value


def _duration_of(pipeline: Pipeline) -> int:
    if pipeline.duration is not None:
        return pipeline.duration
    if pipeline.started_at and pipeline.finished_at:
        return max(int((pipeline.finished_at - pipeline.started_at).total_seconds()), 0)
    return 0


def time_message(pipeline: Pipeline, now: datetime) -> str:
    """Timing line for *pipeline*: when it was queued, started or finished."""
    if pipeline.status == "running":
        return f"started at {layout_time(_required(pipeline, 'started_at'), now)}"
    if pipeline.status not in TERMINAL_STATUSES:
        return f"created at {layout_time(_required(pipeline, 'created_at'), now)}"
    finished = layout_time(_required(pipeline, "finished_at"), now)
    return f"finished at {finished}\nduration: {format_duration(_duration_of(pipeline))}"


# ── Assembly ──────────────────────────────────────────────────────


def pipeline_status(
    pipeline: Pipeline, jobs: Sequence[Job], renderer: Renderer, now: datetime
) -> str:
    """Pipeline status, timing and job counts, preceded by a blank line."""
    status = renderer.style(pipeline.status, classify(pipeline.status).style)
    return (
        f"\nPipeline Status: {status}\n"
        f"{time_message(pipeline, now)}\n\n"
        f"{format_summary(job_summary(jobs))}\n"
    )

