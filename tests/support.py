"""Helpers shared by the callback tests."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import pytest

from eventual import scheduler
from eventual.callback import Computation
from eventual.scheduler import QueueScheduler


@dataclass
class Captured:
    """Handler that records every call it receives."""

    calls: list[tuple[Any, Any]] = field(default_factory=list)

    def __call__(self, cause: Any, value: Any) -> None:
        self.calls.append((cause, value))


def run_all(computation: Computation[Any], queue: QueueScheduler) -> Captured:
    captured = Captured()
    computation.run(captured)
    queue.drain()
    return captured


def value_of(computation: Computation[Any], queue: QueueScheduler) -> Any:
    captured = run_all(computation, queue)
    assert len(captured.calls) == 1, captured.calls
    cause, value = captured.calls[0]
    assert cause is None, f"failed with {cause!r}"
    return value


def failure_of(computation: Computation[Any], queue: QueueScheduler) -> Any:
    captured = run_all(computation, queue)
    assert len(captured.calls) == 1, captured.calls
    cause, _ = captured.calls[0]
    assert cause is not None, "expected a failure"
    return cause


@dataclass
class Gauge:
    """Leaf computations that finish after a number of scheduler hops."""

    in_flight: int = 0
    peak: int = 0
    started: list[Any] = field(default_factory=list)
    finished: list[Any] = field(default_factory=list)

    def later(self, value: Any, hops: int = 1, cause: Any = None) -> Computation[Any]:
        def start(handler: Any) -> None:
            self.in_flight += 1
            self.peak = max(self.peak, self.in_flight)
            self.started.append(value)
            remaining = [hops]

            def tick() -> None:
                remaining[0] -= 1
                if remaining[0] > 0:
                    scheduler.defer(tick)
                    return
                self.in_flight -= 1
                self.finished.append(value)
                if cause is not None:
                    handler(cause, None)
                else:
                    handler(None, value)

            scheduler.defer(tick)

        return Computation(start)


@pytest.fixture
def queue() -> Iterator[QueueScheduler]:
    q = QueueScheduler()
    with scheduler.use_scheduler(q):
        yield q


@pytest.fixture
def gauge() -> Gauge:
    return Gauge()


async def settle(computation: Computation[Any]) -> tuple[Any, Any]:
    """Run computation on the running loop and wait for its (cause, value)."""
    captured = Captured()
    done = asyncio.Event()

    def handler(cause: Any, value: Any) -> None:
        captured(cause, value)
        done.set()

    computation.run(handler)
    await done.wait()
    assert len(captured.calls) == 1, captured.calls
    return captured.calls[0]
