"""Classification of raw GitLab job and pipeline statuses."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from ..config import StatusOptions

# Pipelines still heading towards a terminal status; wait mode keeps polling these.
ACTIVE_STATUSES = frozenset({"created", "waiting_for_resource", "preparing", "pending", "running"})
TERMINAL_STATUSES = frozenset({"success", "failed", "canceled", "skipped"})


class Bucket(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    IN_PROGRESS = "in-progress"
    QUEUED = "queued"
    SKIPPED = "skipped"
    OTHER = "other"


class Style(str, Enum):
    """Display tokens a renderer turns into terminal styling."""

    SUCCESS = "success"
    FAILURE = "failure"
    RUNNING = "running"
    QUEUED = "queued"
    MUTED = "muted"
    PLAIN = "plain"


class Classification(NamedTuple):
    bucket: Bucket
    style: Style


_CLASSES: dict[str, Classification] = {
    "success": Classification(Bucket.SUCCESS, Style.SUCCESS),
    "failed": Classification(Bucket.FAILED, Style.FAILURE),
    "running": Classification(Bucket.IN_PROGRESS, Style.RUNNING),
    "pending": Classification(Bucket.IN_PROGRESS, Style.RUNNING),
    "preparing": Classification(Bucket.IN_PROGRESS, Style.RUNNING),
    "waiting_for_resource": Classification(Bucket.IN_PROGRESS, Style.RUNNING),
    "created": Classification(Bucket.QUEUED, Style.QUEUED),
    "scheduled": Classification(Bucket.QUEUED, Style.QUEUED),
    "manual": Classification(Bucket.QUEUED, Style.QUEUED),
    "skipped": Classification(Bucket.SKIPPED, Style.MUTED),
    "canceled": Classification(Bucket.SKIPPED, Style.MUTED),
}

_UNKNOWN = Classification(Bucket.OTHER, Style.PLAIN)


def classify(status: str) -> Classification:
    return _CLASSES.get(status, _UNKNOWN)


def is_visible(status: str, options: StatusOptions) -> bool:
    """Whether a job row survives the active display filters.

    Each filter hides rows on its own; a row hidden by any of them is dropped.
    Statuses the classifier does not recognise are always shown.
    """
    if classify(status).bucket is Bucket.OTHER:
        return True
    if options.no_skipped and status == "skipped":
        return False
    if options.only_failures and status != "failed":
        return False
    if options.no_created and status == "created":
        return False
    return True


def is_active(status: str) -> bool:
    return status in ACTIVE_STATUSES
