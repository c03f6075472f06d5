"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relprune.core.config import ConfigError
from relprune.core.errors import ErrorCode
from relprune.output.console import Style
from relprune.services.errors import PruneError

if TYPE_CHECKING:
    from relprune.output.console import ConsoleProtocol

__all__ = ["print_config_error", "print_prune_error", "prune_error_exit_code"]


def print_config_error(error: ConfigError, console: ConsoleProtocol) -> None:
    console.error(f"{error.message}, exiting...")
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def print_prune_error(error: PruneError, console: ConsoleProtocol) -> None:
    """Summarize a prune failure with how far the deletion pass got.

    The pruner has already logged the failing call as an error, so this only
    adds dim context lines.
    """
    match error:
        case PruneError(kind="fetch_failed", message=message):
            console.print(f"{message}, no release was deleted", Style.DIM)
        case PruneError(kind="delete_release_failed" | "delete_tag_failed", message=message):
            console.print(
                f"{message}: {error.processed} release(s) were deleted before the failure "
                "and remaining candidates were not processed",
                Style.DIM,
            )
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def prune_error_exit_code(error: PruneError) -> int:
    """Every prune failure maps to the same non-zero status."""
    match error.kind:
        case "fetch_failed" | "delete_release_failed" | "delete_tag_failed":
            return int(ErrorCode.FAILURE)
