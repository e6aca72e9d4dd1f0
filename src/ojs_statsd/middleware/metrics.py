"""StatsD metrics middleware for OJS job processing.

Times every job and counts its outcome, optionally gauging global queue
statistics afterwards. All metrics for one job go out in a single StatsD
pipeline packet.

Metric names, with the default ``env`` and ``prefix``::

    production.worker.<job type>.processing_time   (timer)
    production.worker.<job type>.success           (counter)
    production.worker.<job type>.failure           (counter)
    production.worker.enqueued                     (gauge)
    production.worker.retry_set_size               (gauge)
    production.worker.processed                    (gauge)
    production.worker.failed                       (gauge)

Usage::

    from ojs_statsd.middleware import StatsdMiddleware

    worker.add_middleware(StatsdMiddleware(host="statsd.internal", prefix="billing"))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from typing import Any

from statsd import StatsClient

from ojs_statsd._utils import worker_name
from ojs_statsd.config import (
    DEFAULT_ENV,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_PREFIX,
    DEFAULT_STATS_URL,
    StatsdConfig,
)
from ojs_statsd.job import JobContext
from ojs_statsd.stats import HTTPStatsSource, StatsSource

logger = logging.getLogger("ojs_statsd.middleware")


class StatsdMiddleware:
    """Execution middleware that reports job metrics to StatsD.

    Args:
        statsd: Pre-configured StatsD client. When given, ``host`` and
            ``port`` are ignored and no client is created.
        host: StatsD host. Default: ``"localhost"``.
        port: StatsD UDP port. Default: 8125.
        prefix: Metric prefix after the environment label. Default: ``"worker"``.
        env: Environment label leading every metric. Default: ``"production"``.
        global_stats: Gauge global queue statistics after each job. Default: True.
        stats_source: Source for global statistics. Defaults to an
            :class:`~ojs_statsd.stats.HTTPStatsSource` for ``stats_url``,
            created only when ``global_stats`` is enabled.
        stats_url: OJS server URL for the default stats source.
    """

    def __init__(
        self,
        *,
        statsd: StatsClient | None = None,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        prefix: str | None = DEFAULT_PREFIX,
        env: str | None = DEFAULT_ENV,
        global_stats: bool = True,
        stats_source: StatsSource | None = None,
        stats_url: str = DEFAULT_STATS_URL,
    ) -> None:
        self._config = StatsdConfig(
            host=host,
            port=port,
            prefix=prefix,
            env=env,
            global_stats=global_stats,
            stats_url=stats_url,
        )
        self._owns_statsd = statsd is None
        self._statsd = statsd if statsd is not None else StatsClient(host, port)

        self._stats_source: StatsSource | None = None
        self._owns_stats_source = False
        if global_stats:
            if stats_source is None:
                stats_source = HTTPStatsSource(stats_url)
                self._owns_stats_source = True
            self._stats_source = stats_source

        logger.debug(
            "StatsD middleware configured: host=%s port=%d namespace=%s global_stats=%s",
            host,
            port,
            self._config.metric_name() or "<none>",
            global_stats,
        )

    @property
    def config(self) -> StatsdConfig:
        return self._config

    @property
    def statsd(self) -> StatsClient:
        return self._statsd

    @property
    def stats_source(self) -> StatsSource | None:
        return self._stats_source

    async def __call__(
        self,
        ctx: JobContext,
        next_handler: Callable[[], Coroutine[Any, Any, Any]],
    ) -> Any:
        name = worker_name(ctx.job.type)
        metric = self._config.metric_name

        with self._statsd.pipeline() as pipe:
            try:
                with pipe.timer(metric(name, "processing_time")):
                    result = await next_handler()
                pipe.incr(metric(name, "success"))
                return result
            except Exception:
                pipe.incr(metric(name, "failure"))
                raise
            finally:
                if self._stats_source is not None:
                    await self._gauge_global_stats(pipe, self._stats_source)

    async def _gauge_global_stats(self, pipe: Any, source: StatsSource) -> None:
        try:
            stats = await source.global_stats()
        except Exception:
            logger.exception("Failed to sample global queue stats")
            return

        metric = self._config.metric_name
        pipe.gauge(metric("enqueued"), stats.enqueued)
        pipe.gauge(metric("retry_set_size"), stats.retry_size)
        pipe.gauge(metric("processed"), stats.processed)
        pipe.gauge(metric("failed"), stats.failed)

    async def close(self) -> None:
        """Close the StatsD client and stats source if this middleware created them."""
        if self._owns_statsd:
            self._statsd.close()
        if self._owns_stats_source and isinstance(self._stats_source, HTTPStatsSource):
            await self._stats_source.close()

    async def __aenter__(self) -> StatsdMiddleware:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
