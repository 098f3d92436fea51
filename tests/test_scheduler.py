import asyncio

import pytest

from eventual import SchedulerUnavailable
from eventual import scheduler as Sch


def test_queue_runs_in_fifo_order() -> None:
    queue = Sch.QueueScheduler()
    order: list[int] = []
    for i in range(3):
        queue.defer(lambda i=i: order.append(i))

    assert len(queue) == 3
    assert queue.drain() == 3
    assert order == [0, 1, 2]
    assert queue.run_once() is False


def test_drain_runs_nested_deferrals_and_honours_limit() -> None:
    queue = Sch.QueueScheduler()
    order: list[str] = []

    def outer() -> None:
        order.append("outer")
        queue.defer(lambda: order.append("inner"))

    queue.defer(outer)
    assert queue.drain(limit=1) == 1
    assert order == ["outer"]
    assert queue.drain() == 1
    assert order == ["outer", "inner"]


def test_use_scheduler_is_scoped() -> None:
    queue = Sch.QueueScheduler()
    default = Sch.current()
    with Sch.use_scheduler(queue):
        assert Sch.current() is queue
        Sch.defer(lambda: None)
    assert Sch.current() is default
    assert len(queue) == 1


def test_queue_actions_see_deferring_context() -> None:
    queue = Sch.QueueScheduler()
    seen: list[object] = []
    with Sch.use_scheduler(queue):
        Sch.defer(lambda: seen.append(Sch.current()))
    queue.drain()
    assert seen == [queue]


def test_loop_scheduler_needs_running_loop() -> None:
    with pytest.raises(SchedulerUnavailable):
        Sch.LoopScheduler().defer(lambda: None)


def test_loop_scheduler_defers_to_later_turn() -> None:
    async def run():
        order: list[str] = []
        Sch.LoopScheduler().defer(lambda: order.append("deferred"))
        order.append("now")
        await asyncio.sleep(0)
        assert order == ["now", "deferred"]

    asyncio.run(run())
