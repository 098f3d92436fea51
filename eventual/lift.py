"""
Lift — moving computations in and out of kungfu's LazyCoroResult.

    from eventual import lift

    lazy = lift.to_lazy(C.map(fetch, ids, concurrency=4))
    result = await lazy          # Ok([...]) or Error(cause)

    computation = lift.from_lazy(L.catching_async(load, on_error=str))
"""

from __future__ import annotations

from combinators import lift as L
from kungfu import LazyCoroResult, Result, Ok, Error

from eventual._errors import as_exception, cause_of
from eventual._types import Cause
from eventual.bridge import from_native, to_native
from eventual.callback import Computation, from_result


def to_lazy[T](computation: Computation[T]) -> LazyCoroResult[T, Cause]:
    """
    Lazy result that runs computation each time it is awaited.

    Failures land in Error with the original cause.
    """
    return L.catching_async(lambda: to_native(computation), on_error=cause_of)


def from_lazy[T](lazy: LazyCoroResult[T, Cause]) -> Computation[T]:
    """Computation that awaits lazy on every run."""

    async def settle() -> T:
        result: Result[T, Cause] = await lazy
        match result:
            case Ok(value):
                return value
            case Error(cause):
                raise as_exception(cause)
        raise TypeError(f"expected Result, got {type(result).__name__}")

    return Computation(lambda handler: from_native(settle()).run(handler))


__all__ = ("to_lazy", "from_lazy", "from_result")
