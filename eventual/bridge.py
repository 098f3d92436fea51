"""
Bridge — callback computations <-> asyncio futures.

    from eventual import bridge as B

    computation = B.from_native(fetch_user(42))   # any awaitable
    future = B.to_native(computation)             # asyncio.Future

Causes that are not exceptions travel through futures wrapped in
ComputationError and are unwrapped again on the way back, so
from_native(to_native(c)) fails with exactly the cause c failed with.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any

from eventual._errors import as_exception, cause_of
from eventual._types import Cause, Handler
from eventual.callback._computation import Computation

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# from_native()
# ═══════════════════════════════════════════════════════════════════════════════


def from_native[T](awaitable: Awaitable[T]) -> Computation[T]:
    """
    Wrap an awaitable as a callback computation.

    The awaitable is scheduled on first run (coroutines become tasks);
    later runs observe the same future.
    """
    future: asyncio.Future[T] | None = None

    def start(handler: Handler[T]) -> None:
        nonlocal future
        if future is None:
            future = asyncio.ensure_future(awaitable)

        def on_settled(settled: asyncio.Future[T]) -> None:
            if settled.cancelled():
                handler(asyncio.CancelledError(), None)
                return
            exc = settled.exception()
            if exc is not None:
                handler(cause_of(exc), None)
            else:
                handler(None, settled.result())

        future.add_done_callback(on_settled)

    return Computation(start)


# ═══════════════════════════════════════════════════════════════════════════════
# to_native()
# ═══════════════════════════════════════════════════════════════════════════════


def to_native[T](
    computation: Computation[T],
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> asyncio.Future[T]:
    """Run computation now and return a future of its outcome."""
    if loop is None:
        loop = asyncio.get_running_loop()
    future: asyncio.Future[T] = loop.create_future()

    def on_done(cause: Cause | None, value: Any) -> None:
        if future.cancelled():
            logger.debug("dropping outcome for cancelled future (cause=%r)", cause)
            return
        if cause is not None:
            future.set_exception(as_exception(cause))
        else:
            future.set_result(value)

    computation.run(on_done)
    return future


__all__ = ("from_native", "to_native")
