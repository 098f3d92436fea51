"""
Bulk operators — bounded iteration, mapping, folding, sequencing.

All of them go through one dispatcher:
- items are dequeued in input order from a per-run cursor
- at most `concurrency` items are in flight
- the first failure wins and stops further dequeues
- in-flight siblings still drain, their outcomes are dropped
- success values are written by position, so map keeps input order
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from eventual import scheduler
from eventual._config import DEFAULT_CONCURRENCY, check_concurrency
from eventual._types import Cause, Handler
from eventual.callback._computation import (
    Computation,
    _expect,
    compose,
    discard,
    fail,
    return_,
)

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Dispatcher
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True)
class _Batch:
    """Bookkeeping owned by one run of a bulk operator."""

    total: int
    cursor: int = 0
    completed: int = 0
    failed: bool = False
    results: list[Any] = field(default_factory=list)


def _dispatch[A, B](
    fn: Callable[[int, A], Computation[B]],
    items: Sequence[A],
    concurrency: int,
) -> Computation[list[B]]:
    check_concurrency(concurrency)

    def start(handler: Handler[list[B]]) -> None:
        batch = _Batch(total=len(items), results=[None] * len(items))
        if batch.total == 0:
            handler(None, [])
            return

        def process() -> None:
            if batch.failed or batch.cursor >= batch.total:
                return
            index = batch.cursor
            batch.cursor += 1
            try:
                running = _expect(fn(index, items[index]))
            except Exception as e:
                running = fail(e)
            running.run(lambda cause, value: on_item(index, cause, value))

        def on_item(index: int, cause: Cause | None, value: Any) -> None:
            if batch.failed:
                logger.debug("dropping outcome of item %d after failure", index)
                return
            if cause is not None:
                batch.failed = True
                handler(cause, None)
                return
            batch.results[index] = value
            batch.completed += 1
            if batch.completed == batch.total:
                handler(None, batch.results)
            else:
                scheduler.defer(process)

        for _ in range(min(batch.total, concurrency)):
            scheduler.defer(process)

    return Computation(start)


# ═══════════════════════════════════════════════════════════════════════════════
# iter
# ═══════════════════════════════════════════════════════════════════════════════


def itera[A](
    fn: Callable[[A], Computation[Any]],
    items: Sequence[A],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Computation[None]:
    """Run fn over items, at most `concurrency` at a time."""
    return discard(_dispatch(lambda _, item: fn(item), items, concurrency))


def iter[A](
    fn: Callable[[A], Computation[Any]],
    items: Iterable[A],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Computation[None]:
    return itera(fn, tuple(items), concurrency=concurrency)


def iteri[A](
    fn: Callable[[int, A], Computation[Any]],
    items: Iterable[A],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Computation[None]:
    return discard(_dispatch(fn, tuple(items), concurrency))


# ═══════════════════════════════════════════════════════════════════════════════
# map
# ═══════════════════════════════════════════════════════════════════════════════


def mapa[A, B](
    fn: Callable[[A], Computation[B]],
    items: Sequence[A],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Computation[list[B]]:
    """
    Map fn over items, at most `concurrency` at a time.

    The result list is in input order, whatever order items finish in.
    """
    return _dispatch(lambda _, item: fn(item), items, concurrency)


def map[A, B](
    fn: Callable[[A], Computation[B]],
    items: Iterable[A],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Computation[list[B]]:
    return mapa(fn, tuple(items), concurrency=concurrency)


def mapi[A, B](
    fn: Callable[[int, A], Computation[B]],
    items: Iterable[A],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Computation[list[B]]:
    return _dispatch(fn, tuple(items), concurrency)


# ═══════════════════════════════════════════════════════════════════════════════
# fold
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True)
class _Accumulator[A]:
    value: A

    def store(self, value: A) -> Computation[None]:
        self.value = value
        return return_(None)


def _fold[A, B](
    fn: Callable[[A, int, B], Computation[A]],
    init: Computation[A],
    items: Sequence[B],
    concurrency: int,
) -> Computation[A]:
    check_concurrency(concurrency)

    def with_seed(seed: A) -> Computation[A]:
        acc = _Accumulator(seed)

        def step(index: int, item: B) -> Computation[None]:
            return compose(_expect(fn(acc.value, index, item)), acc.store)

        return compose(_dispatch(step, items, concurrency), lambda _: return_(acc.value))

    return compose(init, with_seed)


def fold_lefta[A, B](
    fn: Callable[[A, B], Computation[A]],
    init: Computation[A],
    items: Sequence[B],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Computation[A]:
    """
    Left fold with an asynchronous step.

    Each step sees the accumulator as it is when the item is dequeued.
    With concurrency > 1 steps overlap, so the fold is no longer
    deterministic; keep the default of 1 unless fn is order-insensitive.
    """
    return _fold(lambda acc, _, item: fn(acc, item), init, items, concurrency)


def fold_left[A, B](
    fn: Callable[[A, B], Computation[A]],
    init: Computation[A],
    items: Iterable[B],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Computation[A]:
    return fold_lefta(fn, init, tuple(items), concurrency=concurrency)


def fold_lefti[A, B](
    fn: Callable[[A, int, B], Computation[A]],
    init: Computation[A],
    items: Iterable[B],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Computation[A]:
    return _fold(fn, init, tuple(items), concurrency)


# ═══════════════════════════════════════════════════════════════════════════════
# seq
# ═══════════════════════════════════════════════════════════════════════════════


def seqa(
    computations: Sequence[Computation[Any]],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Computation[None]:
    """Run already-built computations, one at a time by default."""
    return itera(_expect, computations, concurrency=concurrency)


def seq(
    computations: Iterable[Computation[Any]],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Computation[None]:
    return seqa(tuple(computations), concurrency=concurrency)


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
