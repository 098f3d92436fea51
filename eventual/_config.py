"""
Defaults for combinator options.
"""

from __future__ import annotations

DEFAULT_CONCURRENCY = 1
"""Bulk operators process one item at a time unless told otherwise."""

DEFAULT_NO_STACK = False
"""Continuations run synchronously unless told otherwise."""


def check_concurrency(concurrency: int) -> int:
    """Validate a concurrency bound."""
    if isinstance(concurrency, bool) or not isinstance(concurrency, int):
        raise TypeError(
            f"concurrency must be int, got {type(concurrency).__name__}"
        )
    if concurrency < 1:
        raise ValueError(f"concurrency must be positive, got {concurrency}")
    return concurrency


__all__ = ("DEFAULT_CONCURRENCY", "DEFAULT_NO_STACK", "check_concurrency")
