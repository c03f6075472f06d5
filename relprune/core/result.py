"""Result type for explicit error handling.

Every fallible step of a prune run (config resolution, API calls, the
deletion pass) returns ``Ok`` or ``Err`` instead of raising, so the CLI is the
only place that turns a failure into an exit status.

Usage:
    match api.list_releases("octo", "demo"):
        case Ok(releases):
            console.info(f"{len(releases)} release(s)")
        case Err(error):
            console.error(str(error))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]
