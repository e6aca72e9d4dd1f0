"""Internal utilities shared across ojs-statsd."""

from __future__ import annotations

import re
from datetime import datetime

_SEPARATORS = re.compile(r"[:/|@\s]+")
_DOTS = re.compile(r"\.{2,}")


def parse_datetime(val: str | None) -> datetime | None:
    """Parse an ISO 8601 datetime string, handling the 'Z' suffix."""
    if val is None:
        return None
    return datetime.fromisoformat(val.replace("Z", "+00:00"))


def worker_name(job_type: str) -> str:
    """Normalize a job type into a dot-separated StatsD name segment.

    Colons, pipes and ``@`` delimit fields in the StatsD line protocol, so
    namespaced types such as ``Mailer::WelcomeJob`` become ``Mailer.WelcomeJob``.
    """
    name = _SEPARATORS.sub(".", job_type)
    return _DOTS.sub(".", name).strip(".")
