"""Exit codes for the relprune CLI.

A prune run either succeeds (including benign early returns such as "nothing
matched") or fails; every failure kind shares the same non-zero status so CI
workflows only need to check for zero.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values must remain stable."""

    OK = 0
    FAILURE = 1

    def __str__(self) -> str:
        return self.name.lower()
