"""
Error types.

A failure cause is any value. Exceptions cross into asyncio unchanged
(native causes); everything else, including a ComputationError used as a
cause, is carried by ComputationError (library causes), so the original
cause survives the bridge.
"""

from __future__ import annotations

from eventual._types import Cause


class EventualError(Exception):
    """Base class for errors raised by eventual itself."""


class ComputationError(EventualError):
    """A non-exception failure cause lifted into an exception."""

    def __init__(self, cause: Cause) -> None:
        super().__init__(cause)
        self.cause = cause

    def __repr__(self) -> str:
        return f"ComputationError({self.cause!r})"


class AlreadySettled(EventualError, RuntimeError):
    """A completion handler was invoked more than once."""


class SchedulerUnavailable(EventualError, RuntimeError):
    """No running event loop to defer onto."""


# ═══════════════════════════════════════════════════════════════════════════════
# Cause <-> Exception
# ═══════════════════════════════════════════════════════════════════════════════


def as_exception(cause: Cause) -> BaseException:
    """Return an exception carrying cause. Native exceptions are returned as-is."""
    # Futures refuse StopIteration; ComputationError is always a wrapper on the way back
    if isinstance(cause, BaseException) and not isinstance(
        cause, (StopIteration, ComputationError)
    ):
        return cause
    return ComputationError(cause)


def cause_of(exc: BaseException) -> Cause:
    """Inverse of as_exception."""
    if isinstance(exc, ComputationError):
        return exc.cause
    return exc


__all__ = (
    "EventualError",
    "ComputationError",
    "AlreadySettled",
    "SchedulerUnavailable",
    "as_exception",
    "cause_of",
)
