"""Middleware configuration.

Options are resolved once when a :class:`~ojs_statsd.middleware.StatsdMiddleware`
is constructed and are immutable afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8125
DEFAULT_PREFIX = "worker"
DEFAULT_ENV = "production"
DEFAULT_STATS_URL = "http://localhost:8080"


@dataclass(frozen=True)
class StatsdConfig:
    """Resolved StatsD middleware options.

    Attributes:
        host: StatsD server host.
        port: StatsD server UDP port.
        prefix: Metric name prefix placed after the environment label.
        env: Environment label leading every metric name. ``None`` or an
            empty string omits it.
        global_stats: Whether to gauge global queue statistics after each job.
        stats_url: OJS server URL used to sample global queue statistics.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    prefix: str | None = DEFAULT_PREFIX
    env: str | None = DEFAULT_ENV
    global_stats: bool = True
    stats_url: str = DEFAULT_STATS_URL

    def metric_name(self, *parts: str | None) -> str:
        """Build a dotted metric name, skipping empty segments."""
        return ".".join(p for p in (self.env, self.prefix, *parts) if p)
