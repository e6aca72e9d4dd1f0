"""Job types seen by execution middleware.

Defines the subset of the OJS job model that middleware needs:
Job, JobContext and the JobHandler alias.
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Job:
    """An OJS job envelope as delivered to a worker."""

    id: str
    type: str
    args: list[Any] = field(default_factory=list)
    queue: str = "default"
    meta: dict[str, Any] = field(default_factory=dict)
    attempt: int = 0


# Type alias for a job handler function
JobHandler = Callable[["JobContext"], Coroutine[Any, Any, Any]]


@dataclass
class JobContext:
    """Context passed to middleware and job handlers during execution."""

    job: Job
    attempt: int = 1

    @property
    def job_id(self) -> str:
        return self.job.id

    @property
    def job_type(self) -> str:
        return self.job.type

    @property
    def queue(self) -> str:
        return self.job.queue

    @property
    def args(self) -> list[Any]:
        return self.job.args

    @property
    def meta(self) -> dict[str, Any]:
        return self.job.meta
