"""
Result envelope for the expected failure branches of a run.

Label classification and cost lookup return ``Ok(value)`` or
``Err(error)`` instead of raising: a Size label nobody recognises is an
ordinary outcome for one item, and the per-item loop records it. Exceptions
stay reserved for the fatal paths (configuration, identifier resolution,
item fetch).

Manifesto:
    - **Explicit over Implicit:** No hidden exceptions for expected branches
    - **Batch-friendly:** One bad item is a value, not an unwinding stack

Usage:
    from estimate_spine.core.result import Result, Ok, Err

    match cost_model.lookup(size, risk):
        case Ok(days):
            ...
        case Err(error):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """Failed result carrying the error instead of raising it."""

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the carried error."""
        raise self.error

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


__all__ = ["Ok", "Err", "Result"]
