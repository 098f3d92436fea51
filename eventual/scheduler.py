"""
Scheduler — the one capability the callback core needs from the host.

    from eventual import scheduler as Sch

    queue = Sch.QueueScheduler()
    with Sch.use_scheduler(queue):
        C.finish(computation)
        queue.drain()

Default is LoopScheduler, which defers onto the running asyncio loop.
"""

from __future__ import annotations

import asyncio
import contextvars
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from eventual._errors import SchedulerUnavailable
from eventual._types import Action

# ═══════════════════════════════════════════════════════════════════════════════
# Protocol
# ═══════════════════════════════════════════════════════════════════════════════


class Scheduler(Protocol):
    def defer(self, action: Action) -> None:
        """Run action on a later turn."""
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# asyncio
# ═══════════════════════════════════════════════════════════════════════════════


class LoopScheduler:
    """Defers through loop.call_soon on the running asyncio loop."""

    __slots__ = ()

    def defer(self, action: Action) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise SchedulerUnavailable(
                "no running event loop; run inside asyncio or use a QueueScheduler"
            ) from e
        loop.call_soon(action)

    def __repr__(self) -> str:
        return "LoopScheduler()"


# ═══════════════════════════════════════════════════════════════════════════════
# Manual queue
# ═══════════════════════════════════════════════════════════════════════════════


class QueueScheduler:
    """
    FIFO queue drained by the caller.

    Each action runs in a copy of the context it was deferred from,
    the same way asyncio callbacks do.
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: deque[tuple[contextvars.Context, Action]] = deque()

    def defer(self, action: Action) -> None:
        self._items.append((contextvars.copy_context(), action))

    def run_once(self) -> bool:
        """Run the oldest pending action. False if nothing was pending."""
        if not self._items:
            return False
        ctx, action = self._items.popleft()
        ctx.run(action)
        return True

    def drain(self, limit: int | None = None) -> int:
        """
        Run actions until the queue is empty (or limit actions ran).

        Actions deferred while draining are run too. Returns the count.
        """
        count = 0
        while limit is None or count < limit:
            if not self.run_once():
                break
            count += 1
        return count

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"QueueScheduler(pending={len(self._items)})"


# ═══════════════════════════════════════════════════════════════════════════════
# Selection
# ═══════════════════════════════════════════════════════════════════════════════

_current: contextvars.ContextVar[Scheduler] = contextvars.ContextVar(
    "eventual_scheduler", default=LoopScheduler()
)


def current() -> Scheduler:
    """Scheduler in effect for this context."""
    return _current.get()


def defer(action: Action) -> None:
    """Defer action through the current scheduler."""
    _current.get().defer(action)


@contextmanager
def use_scheduler(scheduler: Scheduler) -> Iterator[Scheduler]:
    """Install scheduler for the duration of the block."""
    token = _current.set(scheduler)
    try:
        yield scheduler
    finally:
        _current.reset(token)


__all__ = (
    "Scheduler",
    "LoopScheduler",
    "QueueScheduler",
    "current",
    "defer",
    "use_scheduler",
)
