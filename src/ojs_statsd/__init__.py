"""StatsD metrics middleware for Open Job Spec workers.

Wraps every job execution with a StatsD timer and success/failure
counters, and optionally gauges global queue statistics.

Usage::

    from ojs_statsd import ExecutionMiddlewareChain, StatsdMiddleware

    chain = ExecutionMiddlewareChain()
    chain.add(StatsdMiddleware(host="statsd.internal", env="staging"))

    # Per job, from the worker:
    result = await chain.execute(ctx, handler)
"""

from ojs_statsd.config import StatsdConfig
from ojs_statsd.errors import (
    StatsAPIError,
    StatsConnectionError,
    StatsError,
    StatsTimeoutError,
)
from ojs_statsd.job import Job, JobContext, JobHandler
from ojs_statsd.middleware import (
    ExecutionMiddleware,
    ExecutionMiddlewareChain,
    StatsdMiddleware,
)
from ojs_statsd.stats import GlobalStats, HTTPStatsSource, QueueStats, StatsSource

__version__ = "0.1.0"

__all__ = [
    # Middleware
    "StatsdMiddleware",
    "StatsdConfig",
    "ExecutionMiddleware",
    "ExecutionMiddlewareChain",
    # Core types
    "Job",
    "JobContext",
    "JobHandler",
    # Stats
    "GlobalStats",
    "HTTPStatsSource",
    "QueueStats",
    "StatsSource",
    # Errors
    "StatsError",
    "StatsAPIError",
    "StatsConnectionError",
    "StatsTimeoutError",
]
