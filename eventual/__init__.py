"""
eventual — asynchronous computation combinators, two ways.

    from eventual import callback as C   # Callback computations
    from eventual import promise as P    # asyncio futures
    from eventual import bridge as B     # C <-> P

Both namespaces share one set of semantics: compose / catch / pipe /
ensure / discard / repeat, bounded iter / map / fold / seq, execute / finish.
"""

from eventual import scheduler
from eventual import callback
from eventual import bridge
from eventual import promise
from eventual import lift
from eventual.callback import Computation
from eventual.bridge import from_native, to_native
from eventual._errors import (
    EventualError,
    ComputationError,
    AlreadySettled,
    SchedulerUnavailable,
    as_exception,
    cause_of,
)
from eventual._types import Cause, Handler, Result, Ok, Error

__version__ = "0.1.0"

__all__ = (
    "scheduler",
    "callback",
    "bridge",
    "promise",
    "lift",
    "Computation",
    "from_native",
    "to_native",
    "EventualError",
    "ComputationError",
    "AlreadySettled",
    "SchedulerUnavailable",
    "as_exception",
    "cause_of",
    "Cause",
    "Handler",
    "Result",
    "Ok",
    "Error",
)
