from eventual import callback as C
from support import Captured, failure_of, value_of


def counter_loop(limit: int, log: list[str]):
    state = {"n": 0}

    def condition() -> C.Computation[bool]:
        log.append("check")
        return C.return_(state["n"] < limit)

    def body() -> C.Computation[None]:
        log.append("body")
        state["n"] += 1
        return C.return_(None)

    return C.repeat(condition, body), state


def test_false_condition_skips_body(queue) -> None:
    log: list[str] = []
    loop, _ = counter_loop(0, log)
    assert value_of(loop, queue) is None
    assert log == ["check"]


def test_runs_until_condition_is_false(queue) -> None:
    log: list[str] = []
    loop, state = counter_loop(3, log)
    assert value_of(loop, queue) is None
    assert state["n"] == 3
    assert log == ["check", "body"] * 3 + ["check"]


def test_first_iteration_is_deferred(queue) -> None:
    log: list[str] = []
    loop, _ = counter_loop(1, log)
    captured = Captured()
    loop.run(captured)
    assert log == []
    queue.drain()
    assert captured.calls == [(None, None)]


def test_condition_failure_after_n_iterations(queue) -> None:
    bodies = 0
    checks = 0

    def condition() -> C.Computation[bool]:
        nonlocal checks
        checks += 1
        if checks > 4:
            return C.fail("condition broke")
        return C.return_(True)

    def body() -> C.Computation[None]:
        nonlocal bodies
        bodies += 1
        return C.return_(None)

    assert failure_of(C.repeat(condition, body), queue) == "condition broke"
    assert bodies == 4


def test_body_failure_stops_loop(queue) -> None:
    bodies = 0

    def body() -> C.Computation[None]:
        nonlocal bodies
        bodies += 1
        return C.fail("body broke") if bodies == 2 else C.return_(None)

    assert failure_of(C.repeat(lambda: C.return_(True), body), queue) == "body broke"
    assert bodies == 2


def test_raises_are_contained(queue) -> None:
    error = ValueError("sync raise")

    def explode():
        raise error

    assert failure_of(C.repeat(explode, lambda: C.return_(None)), queue) is error
    assert failure_of(C.repeat(lambda: C.return_(True), explode), queue) is error


def test_many_iterations_keep_stack_flat(queue) -> None:
    loop, state = counter_loop(5000, [])
    assert value_of(loop, queue) is None
    assert state["n"] == 5000
