"""
Top-level execution for awaitables.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from eventual import callback as C
from eventual.bridge import from_native
from eventual.callback import ExceptionHandler


def execute[T](
    awaitable: Awaitable[T],
    on_success: Callable[[T], None],
    *,
    exception_handler: ExceptionHandler | None = None,
) -> None:
    """Report the outcome of awaitable through callbacks."""
    C.execute(from_native(awaitable), on_success, exception_handler=exception_handler)


def finish(
    awaitable: Awaitable[Any],
    *,
    exception_handler: ExceptionHandler | None = None,
) -> None:
    execute(awaitable, lambda _: None, exception_handler=exception_handler)


__all__ = ("execute", "finish")
