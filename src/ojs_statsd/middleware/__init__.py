"""Execution middleware types, chain management, and the StatsD middleware.

Execution middleware wraps job handlers on the worker side using the
nested/onion pattern: each middleware receives a :class:`JobContext` and
a ``next`` callable, and must await ``next()`` to run the rest of the chain.

Usage::

    from ojs_statsd.middleware import ExecutionMiddlewareChain, StatsdMiddleware

    chain = ExecutionMiddlewareChain()
    chain.add(StatsdMiddleware(prefix="billing", env="staging"))
    result = await chain.execute(ctx, handler)
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from typing import Any

from ojs_statsd.job import JobContext, JobHandler

# Execution middleware: receives a JobContext and a next callable.
# Calling next() passes to the next middleware or the handler.
ExecutionNext = Callable[[], Coroutine[Any, Any, Any]]
ExecutionMiddleware = Callable[[JobContext, ExecutionNext], Coroutine[Any, Any, Any]]


class ExecutionMiddlewareChain:
    """Manages the ordered list of execution middleware.

    Uses the onion/nested pattern: first added is outermost.
    """

    def __init__(self) -> None:
        self._middlewares: list[ExecutionMiddleware] = []

    def __len__(self) -> int:
        return len(self._middlewares)

    def add(self, middleware: ExecutionMiddleware) -> None:
        """Append middleware to the end of the chain."""
        self._middlewares.append(middleware)

    def prepend(self, middleware: ExecutionMiddleware) -> None:
        """Insert middleware at the beginning of the chain."""
        self._middlewares.insert(0, middleware)

    def insert_before(self, target: ExecutionMiddleware, middleware: ExecutionMiddleware) -> None:
        """Insert middleware before a specific existing middleware."""
        idx = self._middlewares.index(target)
        self._middlewares.insert(idx, middleware)

    def insert_after(self, target: ExecutionMiddleware, middleware: ExecutionMiddleware) -> None:
        """Insert middleware after a specific existing middleware."""
        idx = self._middlewares.index(target)
        self._middlewares.insert(idx + 1, middleware)

    def remove(self, middleware: ExecutionMiddleware) -> None:
        """Remove a middleware from the chain."""
        self._middlewares.remove(middleware)

    async def execute(self, ctx: JobContext, handler: JobHandler) -> Any:
        """Execute the middleware chain wrapping the handler."""

        async def _build_chain(
            middlewares: list[ExecutionMiddleware],
        ) -> Any:
            if not middlewares:
                return await handler(ctx)

            current = middlewares[0]
            remaining = middlewares[1:]

            async def next_fn() -> Any:
                return await _build_chain(remaining)

            return await current(ctx, next_fn)

        return await _build_chain(list(self._middlewares))


from ojs_statsd.middleware.metrics import StatsdMiddleware  # noqa: E402

__all__ = [
    "ExecutionMiddleware",
    "ExecutionMiddlewareChain",
    "ExecutionNext",
    "StatsdMiddleware",
]
