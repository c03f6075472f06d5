from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

PruneErrorKind = Literal[
    "fetch_failed",
    "delete_release_failed",
    "delete_tag_failed",
]


@dataclass(frozen=True, slots=True)
class PruneError:
    kind: PruneErrorKind
    message: str
    hint: str | None = None
    # Candidates fully handled before the failing one; they are not rolled back.
    processed: int = 0
