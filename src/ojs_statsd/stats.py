"""Global queue statistics sampled by the StatsD middleware.

Provides the :class:`StatsSource` protocol and an HTTP implementation
that reads queue statistics from an OJS server using httpx.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

import httpx

from ojs_statsd._utils import parse_datetime
from ojs_statsd.errors import StatsConnectionError, StatsTimeoutError, raise_for_error

logger = logging.getLogger("ojs_statsd.stats")

_OJS_CONTENT_TYPE = "application/openjobspec+json"
_OJS_BASE_PATH = "/ojs/v1"


@dataclass
class QueueStats:
    """Statistics for a single OJS queue."""

    queue: str
    status: str = "active"
    available: int = 0
    active: int = 0
    scheduled: int = 0
    retryable: int = 0
    discarded: int = 0
    completed_last_hour: int = 0
    failed_last_hour: int = 0
    computed_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QueueStats:
        stats = data.get("stats", {})
        return cls(
            queue=data["queue"],
            status=data.get("status", "active"),
            available=stats.get("available", 0),
            active=stats.get("active", 0),
            scheduled=stats.get("scheduled", 0),
            retryable=stats.get("retryable", 0),
            discarded=stats.get("discarded", 0),
            completed_last_hour=stats.get("completed_last_hour", 0),
            failed_last_hour=stats.get("failed_last_hour", 0),
            computed_at=parse_datetime(data.get("computed_at")),
        )


@dataclass(frozen=True)
class GlobalStats:
    """Server-wide job counts gauged after every job."""

    enqueued: int = 0
    retry_size: int = 0
    processed: int = 0
    failed: int = 0

    @classmethod
    def from_queue_stats(cls, queues: list[QueueStats]) -> GlobalStats:
        """Sum per-queue statistics into server-wide counts.

        ``processed`` and ``failed`` use the server's last-hour windows.
        """
        return cls(
            enqueued=sum(q.available for q in queues),
            retry_size=sum(q.retryable for q in queues),
            processed=sum(q.completed_last_hour for q in queues),
            failed=sum(q.failed_last_hour for q in queues),
        )


@runtime_checkable
class StatsSource(Protocol):
    """Protocol for sampling global queue statistics."""

    async def global_stats(self) -> GlobalStats:
        """Return the current server-wide counts."""
        ...


class HTTPStatsSource:
    """Reads queue statistics from the OJS HTTP admin endpoints.

    Args:
        base_url: The OJS server base URL (e.g., "http://localhost:8080").
        timeout: Request timeout in seconds. Default: 5.
        headers: Additional HTTP headers to include in all requests.
        client: Optional pre-configured httpx.AsyncClient to use.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        default_headers = {"Accept": _OJS_CONTENT_TYPE}
        if headers:
            default_headers.update(headers)

        self._client = client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers=default_headers,
        )

    async def _get(self, path: str) -> dict[str, Any]:
        try:
            response = await self._client.get(f"{_OJS_BASE_PATH}{path}")
        except httpx.ConnectError as e:
            raise StatsConnectionError(
                f"Failed to connect to OJS server at {self._base_url}: {e}"
            ) from e
        except httpx.TimeoutException as e:
            raise StatsTimeoutError(f"Request to OJS server timed out: {e}") from e

        if response.status_code >= 400:
            raise_for_error(response.status_code, response.json())

        result: dict[str, Any] = response.json()
        return result

    async def list_queues(self) -> list[str]:
        data = await self._get("/queues")
        return [q["name"] for q in data.get("queues", [])]

    async def queue_stats(self, queue_name: str) -> QueueStats:
        data = await self._get(f"/queues/{queue_name}/stats")
        return QueueStats.from_dict(data)

    async def global_stats(self) -> GlobalStats:
        names = await self.list_queues()
        queues = list(await asyncio.gather(*(self.queue_stats(name) for name in names)))
        logger.debug("Sampled stats for %d queues", len(queues))
        return GlobalStats.from_queue_stats(queues)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HTTPStatsSource:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
