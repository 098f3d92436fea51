"""
Callback computations — construction, composition, recovery, cleanup.

A computation wraps a start function. Running it hands the start function
a completion handler that must be called exactly once with (cause, value).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from dataclasses import dataclass
from typing import Any

from kungfu import Result, Ok, Error

from eventual import scheduler
from eventual._config import DEFAULT_NO_STACK
from eventual._errors import AlreadySettled
from eventual._types import Action, Cause, Handler, Start

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Exactly-once guard
# ═══════════════════════════════════════════════════════════════════════════════


class _Once[T]:
    """Single-assignment outcome slot in front of a handler."""

    __slots__ = ("_handler", "outcome")

    def __init__(self, handler: Handler[T]) -> None:
        self._handler = handler
        self.outcome: Result[T, Cause] | None = None

    def __call__(self, cause: Cause | None, value: T | None) -> None:
        if self.outcome is not None:
            raise AlreadySettled(f"handler already settled with {self.outcome!r}")
        self.outcome = Ok(value) if cause is None else Error(cause)
        self._handler(cause, value)


# ═══════════════════════════════════════════════════════════════════════════════
# Computation
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Computation[T]:
    """
    Lazy asynchronous computation in callback form.

    Operators:
        c >> f     compose (f: value -> Computation)
        c | h      catch   (h: cause -> Computation)
        c @ fn     pipe    (fn: value -> value)
        c & fin    ensure  (fin: () -> Computation)

    Awaiting a computation runs it on the current asyncio loop.
    """

    start: Start[T]

    def run(self, handler: Handler[T]) -> None:
        """
        Start the computation.

        A raise from the start function before the handler fired becomes
        the failure. A raise after that came from downstream and propagates.
        """
        # Reuse a guard handed down a chain so completion depth stays flat
        once = handler if isinstance(handler, _Once) else _Once(handler)
        try:
            self.start(once)
        except Exception as e:
            if once.outcome is not None:
                raise
            once(e, None)

    def then[U](
        self,
        f: Callable[[T], Computation[U]],
        *,
        no_stack: bool = DEFAULT_NO_STACK,
    ) -> Computation[U]:
        return compose(self, f, no_stack=no_stack)

    def catch(
        self,
        h: Callable[[Cause], Computation[T]],
        *,
        no_stack: bool = DEFAULT_NO_STACK,
    ) -> Computation[T]:
        return catch(self, h, no_stack=no_stack)

    def map[U](
        self,
        fn: Callable[[T], U],
        *,
        no_stack: bool = DEFAULT_NO_STACK,
    ) -> Computation[U]:
        return pipe(self, fn, no_stack=no_stack)

    def ensure(
        self,
        finalizer: Callable[[], Computation[Any]],
        *,
        no_stack: bool = DEFAULT_NO_STACK,
    ) -> Computation[T]:
        return ensure(self, finalizer, no_stack=no_stack)

    def discard(self) -> Computation[None]:
        return discard(self)

    def __rshift__[U](self, f: Callable[[T], Computation[U]]) -> Computation[U]:
        return compose(self, f)

    def __or__(self, h: Callable[[Cause], Computation[T]]) -> Computation[T]:
        return catch(self, h)

    def __matmul__[U](self, fn: Callable[[T], U]) -> Computation[U]:
        return pipe(self, fn)

    def __and__(self, finalizer: Callable[[], Computation[Any]]) -> Computation[T]:
        return ensure(self, finalizer)

    def __await__(self) -> Generator[Any, None, T]:
        from eventual.bridge import to_native

        return to_native(self).__await__()


def _expect(value: object) -> Computation[Any]:
    if not isinstance(value, Computation):
        raise TypeError(f"expected Computation, got {type(value).__name__}")
    return value


def _on_next(action: Action, no_stack: bool) -> None:
    if no_stack:
        scheduler.defer(action)
    else:
        action()


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def return_[T](value: T) -> Computation[T]:
    """Computation that succeeds with value."""

    def start(handler: Handler[T]) -> None:
        handler(None, value)

    return Computation(start)


def fail(cause: Cause) -> Computation[Any]:
    """Computation that fails with cause."""
    if cause is None:
        raise TypeError("failure cause must not be None")

    def start(handler: Handler[Any]) -> None:
        handler(cause, None)

    return Computation(start)


def from_result[T](result: Result[T, Cause]) -> Computation[T]:
    """Lift a kungfu Result."""
    match result:
        case Ok(value):
            return return_(value)
        case Error(cause):
            return fail(cause)
    raise TypeError(f"expected Result, got {type(result).__name__}")


def attempt[T](current: Computation[T]) -> Computation[Result[T, Cause]]:
    """Materialize the outcome as a Result. Never fails."""

    def start(handler: Handler[Result[T, Cause]]) -> None:
        def on_current(cause: Cause | None, value: Any) -> None:
            handler(None, Ok(value) if cause is None else Error(cause))

        current.run(on_current)

    return Computation(start)


# ═══════════════════════════════════════════════════════════════════════════════
# compose() — Bind
# ═══════════════════════════════════════════════════════════════════════════════


def compose[T, U](
    current: Computation[T],
    next_: Callable[[T], Computation[U]],
    *,
    no_stack: bool = DEFAULT_NO_STACK,
) -> Computation[U]:
    """
    Run current, then feed its value to next_.

    Failure skips next_. A raise from next_ becomes the failure.
    With no_stack, next_ is called on a later scheduler turn.
    """

    def start(handler: Handler[U]) -> None:
        def on_current(cause: Cause | None, value: Any) -> None:
            if cause is not None:
                handler(cause, None)
                return

            def resume() -> None:
                try:
                    following = _expect(next_(value))
                except Exception as e:
                    following = fail(e)
                following.run(handler)

            _on_next(resume, no_stack)

        current.run(on_current)

    return Computation(start)


# ═══════════════════════════════════════════════════════════════════════════════
# catch() — Recover
# ═══════════════════════════════════════════════════════════════════════════════


def catch[T](
    current: Computation[T],
    catcher: Callable[[Cause], Computation[T]],
    *,
    no_stack: bool = DEFAULT_NO_STACK,
) -> Computation[T]:
    """
    Run current; on failure, continue with catcher(cause).

    no_stack defers both paths so timing does not depend on the outcome.
    """

    def start(handler: Handler[T]) -> None:
        def on_current(cause: Cause | None, value: Any) -> None:
            if cause is None:
                _on_next(lambda: handler(None, value), no_stack)
                return

            def recover() -> None:
                try:
                    fallback = _expect(catcher(cause))
                except Exception as e:
                    fallback = fail(e)
                fallback.run(handler)

            _on_next(recover, no_stack)

        current.run(on_current)

    return Computation(start)


# ═══════════════════════════════════════════════════════════════════════════════
# pipe() — Map
# ═══════════════════════════════════════════════════════════════════════════════


def pipe[T, U](
    current: Computation[T],
    fn: Callable[[T], U],
    *,
    no_stack: bool = DEFAULT_NO_STACK,
) -> Computation[U]:
    """Transform the success value with a plain function."""

    def start(handler: Handler[U]) -> None:
        def on_current(cause: Cause | None, value: Any) -> None:
            def resume() -> None:
                if cause is not None:
                    handler(cause, None)
                    return
                try:
                    mapped = return_(fn(value))
                except Exception as e:
                    mapped = fail(e)
                mapped.run(handler)

            _on_next(resume, no_stack)

        current.run(on_current)

    return Computation(start)


# ═══════════════════════════════════════════════════════════════════════════════
# ensure() — Finally
# ═══════════════════════════════════════════════════════════════════════════════


def ensure[T](
    current: Computation[T],
    finalizer: Callable[[], Computation[Any]],
    *,
    no_stack: bool = DEFAULT_NO_STACK,
) -> Computation[T]:
    """
    Run current, then always run finalizer, then deliver current's outcome.

    The finalizer's own failure is logged and dropped.
    """

    def start(handler: Handler[T]) -> None:
        def on_current(cause: Cause | None, value: Any) -> None:
            def on_finalized(finalizer_cause: Cause | None, _: Any) -> None:
                if finalizer_cause is not None:
                    logger.warning("finalizer failed: %r", finalizer_cause)
                handler(cause, value)

            def release() -> None:
                try:
                    finalizing = _expect(finalizer())
                except Exception as e:
                    finalizing = fail(e)
                finalizing.run(on_finalized)

            _on_next(release, no_stack)

        current.run(on_current)

    return Computation(start)


def discard(current: Computation[Any]) -> Computation[None]:
    """Drop the success value."""

    def start(handler: Handler[None]) -> None:
        current.run(lambda cause, _: handler(cause, None))

    return Computation(start)


# ═══════════════════════════════════════════════════════════════════════════════
# Aliases
# ═══════════════════════════════════════════════════════════════════════════════

pure = return_
bind = compose
recover = catch
fmap = pipe
guard = ensure

# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "Computation",
    "return_",
    "pure",
    "fail",
    "from_result",
    "attempt",
    "compose",
    "bind",
    "catch",
    "recover",
    "pipe",
    "fmap",
    "ensure",
    "guard",
    "discard",
)
