"""
Promise combinators — composition, recovery, cleanup, loop.

Values are asyncio futures. Every combinator converts its inputs with
from_native, runs the callback combinator, and converts back with
to_native, so both representations share one set of semantics.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from eventual import callback as C
from eventual._config import DEFAULT_NO_STACK
from eventual._errors import as_exception
from eventual._types import Cause
from eventual.bridge import from_native, to_native

# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def return_[T](value: T) -> asyncio.Future[T]:
    """Future already resolved with value."""
    future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
    future.set_result(value)
    return future


def fail(cause: Cause) -> asyncio.Future[Any]:
    """Future already rejected with cause."""
    if cause is None:
        raise TypeError("failure cause must not be None")
    future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
    future.set_exception(as_exception(cause))
    return future


# ═══════════════════════════════════════════════════════════════════════════════
# Composition
# ═══════════════════════════════════════════════════════════════════════════════


def compose[T, U](
    current: Awaitable[T],
    next_: Callable[[T], Awaitable[U]],
    *,
    no_stack: bool = DEFAULT_NO_STACK,
) -> asyncio.Future[U]:
    return to_native(
        C.compose(
            from_native(current),
            lambda value: from_native(next_(value)),
            no_stack=no_stack,
        )
    )


def catch[T](
    current: Awaitable[T],
    catcher: Callable[[Cause], Awaitable[T]],
    *,
    no_stack: bool = DEFAULT_NO_STACK,
) -> asyncio.Future[T]:
    """On failure continue with catcher(cause); cause is the original value."""
    return to_native(
        C.catch(
            from_native(current),
            lambda cause: from_native(catcher(cause)),
            no_stack=no_stack,
        )
    )


def pipe[T, U](
    current: Awaitable[T],
    fn: Callable[[T], U],
    *,
    no_stack: bool = DEFAULT_NO_STACK,
) -> asyncio.Future[U]:
    return to_native(C.pipe(from_native(current), fn, no_stack=no_stack))


def ensure[T](
    current: Awaitable[T],
    finalizer: Callable[[], Awaitable[Any]],
    *,
    no_stack: bool = DEFAULT_NO_STACK,
) -> asyncio.Future[T]:
    """Always await finalizer() after current, then settle as current did."""
    return to_native(
        C.ensure(
            from_native(current),
            lambda: from_native(finalizer()),
            no_stack=no_stack,
        )
    )


def discard(current: Awaitable[Any]) -> asyncio.Future[None]:
    return to_native(C.discard(from_native(current)))


def repeat(
    condition: Callable[[], Awaitable[bool]],
    body: Callable[[], Awaitable[Any]],
) -> asyncio.Future[None]:
    """Await body() while condition() resolves truthy."""
    return to_native(
        C.repeat(
            lambda: from_native(condition()),
            lambda: from_native(body()),
        )
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Aliases
# ═══════════════════════════════════════════════════════════════════════════════

pure = return_
bind = compose
recover = catch
fmap = pipe
guard = ensure

__all__ = (
    "return_",
    "pure",
    "fail",
    "compose",
    "bind",
    "catch",
    "recover",
    "pipe",
    "fmap",
    "ensure",
    "guard",
    "discard",
    "repeat",
)
