"""Shared test fixtures for the ojs-statsd test suite."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import pytest

from ojs_statsd.job import Job, JobContext
from ojs_statsd.stats import GlobalStats


class FakeStatsClient:
    """In-memory stand-in for ``statsd.StatsClient``.

    Records every metric as a ``(kind, name, value)`` tuple. Pipelines
    write into the same log and count how many times they were sent.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []
        self.pipelines_sent = 0

    def incr(self, stat: str, count: int = 1, rate: float = 1) -> None:
        self.calls.append(("incr", stat, count))

    def gauge(self, stat: str, value: float, rate: float = 1, delta: bool = False) -> None:
        self.calls.append(("gauge", stat, value))

    def timing(self, stat: str, delta: float, rate: float = 1) -> None:
        self.calls.append(("timing", stat, delta))

    @contextmanager
    def timer(self, stat: str, rate: float = 1) -> Generator[None, None, None]:
        try:
            yield
        finally:
            self.timing(stat, 1.0)

    @contextmanager
    def pipeline(self) -> Generator[FakeStatsClient, None, None]:
        try:
            yield self
        finally:
            self.pipelines_sent += 1

    def names(self, kind: str) -> list[str]:
        return [name for k, name, _ in self.calls if k == kind]


class FakeStatsSource:
    """Configurable in-memory StatsSource."""

    def __init__(self, stats: GlobalStats | None = None, error: Exception | None = None) -> None:
        self.stats = stats or GlobalStats(enqueued=7, retry_size=2, processed=100, failed=3)
        self.error = error
        self.calls = 0

    async def global_stats(self) -> GlobalStats:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.stats


def make_ctx(job_type: str = "mailer.welcome", queue: str = "mailer") -> JobContext:
    job = Job(id="test-id", type=job_type, queue=queue)
    return JobContext(job=job, attempt=1)


@pytest.fixture
def client() -> FakeStatsClient:
    return FakeStatsClient()


@pytest.fixture
def stats_source() -> FakeStatsSource:
    return FakeStatsSource()
