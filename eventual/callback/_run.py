"""
Top-level execution.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from eventual._errors import as_exception
from eventual._types import Cause
from eventual.callback._computation import Computation

type ExceptionHandler = Callable[[Cause], None]


def reraise(cause: Cause) -> None:
    """Default exception handler: raise the cause to the host."""
    raise as_exception(cause)


def execute[T](
    computation: Computation[T],
    on_success: Callable[[T], None],
    *,
    exception_handler: ExceptionHandler | None = None,
) -> None:
    """
    Run computation, reporting its outcome.

    Without exception_handler a failure is raised: to the caller when the
    computation settles synchronously, otherwise to the event loop's
    exception handler.
    """
    handle = exception_handler if exception_handler is not None else reraise

    def on_done(cause: Cause | None, value: Any) -> None:
        if cause is None:
            on_success(value)
        else:
            handle(cause)

    computation.run(on_done)


def finish(
    computation: Computation[Any],
    *,
    exception_handler: ExceptionHandler | None = None,
) -> None:
    """Run computation for its effects."""
    execute(computation, lambda _: None, exception_handler=exception_handler)


__all__ = ("ExceptionHandler", "reraise", "execute", "finish")
