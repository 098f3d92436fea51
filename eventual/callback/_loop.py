"""
Conditional loop.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from eventual import scheduler
from eventual._types import Cause, Handler
from eventual.callback._computation import Computation, _expect, fail


def repeat(
    condition: Callable[[], Computation[bool]],
    body: Callable[[], Computation[Any]],
) -> Computation[None]:
    """
    Run body while condition yields True.

    Every iteration starts on a fresh scheduler turn, so the stack does not
    grow with the iteration count. There is no iteration cap.

    Example:
        remaining = [3]

        def more() -> Computation[bool]:
            return C.return_(remaining[0] > 0)

        def tick() -> Computation[None]:
            remaining[0] -= 1
            return C.return_(None)

        C.repeat(more, tick)
    """

    def start(handler: Handler[None]) -> None:
        def iterate() -> None:
            try:
                checking = _expect(condition())
            except Exception as e:
                checking = fail(e)
            checking.run(on_condition)

        def on_condition(cause: Cause | None, proceed: Any) -> None:
            if cause is not None:
                handler(cause, None)
                return
            if not proceed:
                handler(None, None)
                return
            try:
                running = _expect(body())
            except Exception as e:
                running = fail(e)
            running.run(on_body)

        def on_body(cause: Cause | None, _: Any) -> None:
            if cause is not None:
                handler(cause, None)
                return
            scheduler.defer(iterate)

        scheduler.defer(iterate)

    return Computation(start)


__all__ = ("repeat",)
