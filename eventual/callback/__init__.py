"""
Callback — computations as start functions taking a completion handler.

    from eventual import callback as C

    total = C.fold_left(lambda acc, x: C.return_(acc + x), C.return_(0), [1, 2, 3])
    doubled = C.map(lambda x: C.return_(x * 2), [1, 2, 3], concurrency=2)
    C.execute(total >> (lambda n: C.return_(n * 10)), print)
"""

from __future__ import annotations

from eventual.callback._computation import (
    Computation,
    return_,
    pure,
    fail,
    from_result,
    attempt,
    compose,
    bind,
    catch,
    recover,
    pipe,
    fmap,
    ensure,
    guard,
    discard,
)
from eventual.callback._loop import repeat
from eventual.callback._bulk import (
    itera,
    iter,
    iteri,
    mapa,
    map,
    mapi,
    fold_lefta,
    fold_left,
    fold_lefti,
    seqa,
    seq,
)
from eventual.callback._run import ExceptionHandler, reraise, execute, finish
from eventual.bridge import from_native, to_native

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
    "repeat",
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
    "ExceptionHandler",
    "reraise",
    "execute",
    "finish",
    "from_native",
    "to_native",
)
