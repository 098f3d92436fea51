"""
Promise bulk operators.

Same dispatch rules as the callback versions. Item functions are called
at dequeue time, so coroutine functions respect the concurrency bound;
futures that are already running do not.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Any

from eventual import callback as C
from eventual._config import DEFAULT_CONCURRENCY
from eventual.bridge import from_native, to_native


def itera[A](
    fn: Callable[[A], Awaitable[Any]],
    items: Sequence[A],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> asyncio.Future[None]:
    return to_native(
        C.itera(lambda item: from_native(fn(item)), items, concurrency=concurrency)
    )


def iter[A](
    fn: Callable[[A], Awaitable[Any]],
    items: Iterable[A],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> asyncio.Future[None]:
    return itera(fn, tuple(items), concurrency=concurrency)


def iteri[A](
    fn: Callable[[int, A], Awaitable[Any]],
    items: Iterable[A],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> asyncio.Future[None]:
    return to_native(
        C.iteri(
            lambda index, item: from_native(fn(index, item)),
            items,
            concurrency=concurrency,
        )
    )


def mapa[A, B](
    fn: Callable[[A], Awaitable[B]],
    items: Sequence[A],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> asyncio.Future[list[B]]:
    """Results come back in input order."""
    return to_native(
        C.mapa(lambda item: from_native(fn(item)), items, concurrency=concurrency)
    )


def map[A, B](
    fn: Callable[[A], Awaitable[B]],
    items: Iterable[A],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> asyncio.Future[list[B]]:
    return mapa(fn, tuple(items), concurrency=concurrency)


def mapi[A, B](
    fn: Callable[[int, A], Awaitable[B]],
    items: Iterable[A],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> asyncio.Future[list[B]]:
    return to_native(
        C.mapi(
            lambda index, item: from_native(fn(index, item)),
            items,
            concurrency=concurrency,
        )
    )


def fold_lefta[A, B](
    fn: Callable[[A, B], Awaitable[A]],
    init: Awaitable[A],
    items: Sequence[B],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> asyncio.Future[A]:
    """Left fold. Deterministic only with the default concurrency of 1."""
    return to_native(
        C.fold_lefta(
            lambda acc, item: from_native(fn(acc, item)),
            from_native(init),
            items,
            concurrency=concurrency,
        )
    )


def fold_left[A, B](
    fn: Callable[[A, B], Awaitable[A]],
    init: Awaitable[A],
    items: Iterable[B],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> asyncio.Future[A]:
    return fold_lefta(fn, init, tuple(items), concurrency=concurrency)


def fold_lefti[A, B](
    fn: Callable[[A, int, B], Awaitable[A]],
    init: Awaitable[A],
    items: Iterable[B],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> asyncio.Future[A]:
    return to_native(
        C.fold_lefti(
            lambda acc, index, item: from_native(fn(acc, index, item)),
            from_native(init),
            items,
            concurrency=concurrency,
        )
    )


def seqa(
    awaitables: Sequence[Awaitable[Any]],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> asyncio.Future[None]:
    """
    Await awaitables, at most `concurrency` at a time.

    Coroutines left undequeued behind a failure are closed, never awaited.
    """
    dequeued = [False] * len(awaitables)

    def launch(index: int, awaitable: Awaitable[Any]) -> C.Computation[Any]:
        dequeued[index] = True
        return from_native(awaitable)

    def close_leftovers() -> C.Computation[None]:
        for index, awaitable in enumerate(awaitables):
            if not dequeued[index] and inspect.iscoroutine(awaitable):
                awaitable.close()
        return C.return_(None)

    return to_native(
        C.ensure(C.iteri(launch, awaitables, concurrency=concurrency), close_leftovers)
    )


def seq(
    awaitables: Iterable[Awaitable[Any]],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> asyncio.Future[None]:
    return seqa(tuple(awaitables), concurrency=concurrency)


__all__ = (
    "itera",
    "iter",
    "iteri",
    "mapa",
    "map",
    "mapi",
    "fold_lefta",
    "fold_left",
    "fold_lefti",
    "seqa",
    "seq",
)
