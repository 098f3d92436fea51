"""
Promise — the same combinators over asyncio futures.

    from eventual import promise as P

    async def main() -> None:
        total = await P.fold_left(add_async, P.return_(0), [1, 2, 3])
        pages = await P.map(fetch_page, urls, concurrency=4)

Results are asyncio.Future objects; inputs may be any awaitable.
"""

from __future__ import annotations

from eventual.promise._ops import (
    return_,
    pure,
    fail,
    compose,
    bind,
    catch,
    recover,
    pipe,
    fmap,
    ensure,
    guard,
    discard,
    repeat,
)
from eventual.promise._bulk import (
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
from eventual.promise._run import execute, finish

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
    "execute",
    "finish",
)
