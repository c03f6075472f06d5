"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from relprune.core.errors import ErrorCode
from relprune.core.result import Err, Result
from relprune.output.errors import print_prune_error, prune_error_exit_code
from relprune.services.errors import PruneError

if TYPE_CHECKING:
    from relprune.cli.context import CLIContext

T = TypeVar("T")


def exit_on_error(result: Result[T, PruneError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its status.

    This is the single place where a prune failure becomes a process exit code.
    """
    if isinstance(result, Err):
        print_prune_error(result.error, ctx.console)
        exit_with_code(prune_error_exit_code(result.error))
    return result.value


def exit_with_code(code: int = int(ErrorCode.FAILURE)) -> NoReturn:
    raise typer.Exit(code=code)
