"""
Core types for eventual.

Re-exports the result channel from kungfu + handler/cause aliases.
"""

from __future__ import annotations

from collections.abc import Callable

# Re-export from kungfu
from kungfu import Result, Ok, Error

# ═══════════════════════════════════════════════════════════════════════════════
# Outcome Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Cause = object
"""Failure cause. Any value except None; never inspected by combinators."""

type Handler[T] = Callable[[Cause | None, T | None], None]
"""Completion handler: (cause, value). cause is None on success."""

type Start[T] = Callable[[Handler[T]], None]
"""Start function of a callback computation."""

type Action = Callable[[], None]
"""Zero-argument action handed to a scheduler."""

# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    # Aliases
    "Cause",
    "Handler",
    "Start",
    "Action",
)
