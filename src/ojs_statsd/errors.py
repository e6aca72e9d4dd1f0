"""ojs-statsd error types.

Maps failures of the OJS stats endpoints to Python exceptions.
"""

from __future__ import annotations

from typing import Any


class StatsError(Exception):
    """Base exception for all ojs-statsd errors."""


class StatsAPIError(StatsError):
    """Error returned by the OJS server's stats endpoints.

    Attributes:
        status_code: HTTP status code from the server.
        code: OJS error code from the response body.
    """

    def __init__(self, status_code: int, code: str, message: str) -> None:
        self.status_code = status_code
        self.code = code
        super().__init__(f"OJS stats error {status_code}: [{code}] {message}")


class StatsConnectionError(StatsError):
    """Failed to connect to the OJS server."""


class StatsTimeoutError(StatsError):
    """Request to the OJS server timed out."""


def raise_for_error(status_code: int, body: dict[str, Any]) -> None:
    """Parse an OJS error response and raise :class:`StatsAPIError`."""
    error_data = body.get("error", {})
    raise StatsAPIError(
        status_code,
        error_data.get("code", "unknown"),
        error_data.get("message", "Unknown error"),
    )
