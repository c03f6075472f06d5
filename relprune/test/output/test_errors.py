from __future__ import annotations

from relprune.core.config import ConfigError
from relprune.core.errors import ErrorCode
from relprune.output.console import MockConsole
from relprune.output.errors import print_config_error, print_prune_error, prune_error_exit_code
from relprune.services.errors import PruneError


def test_print_config_error_with_hint() -> None:
    console = MockConsole()
    print_config_error(ConfigError("No GITHUB_TOKEN found", hint="pass `GITHUB_TOKEN` as env"), console)
    assert console.messages == [
        "error: No GITHUB_TOKEN found, exiting...",
        "hint: pass `GITHUB_TOKEN` as env",
    ]


def test_print_fetch_error() -> None:
    console = MockConsole()
    print_prune_error(PruneError(kind="fetch_failed", message="failed to list releases"), console)
    assert console.messages == ["failed to list releases, no release was deleted"]
    assert not console.has_error()


def test_print_delete_error_reports_progress() -> None:
    console = MockConsole()
    error = PruneError(
        kind="delete_tag_failed",
        message="release 2 deleted but tag v2 was not",
        hint="HTTP 422: Reference does not exist",
        processed=1,
    )
    print_prune_error(error, console)
    assert not console.has_error()
    assert console.find("1 release(s) were deleted before the failure")
    assert console.find("hint: HTTP 422")


def test_every_kind_maps_to_failure() -> None:
    for kind in ("fetch_failed", "delete_release_failed", "delete_tag_failed"):
        error = PruneError(kind=kind, message="x")  # type: ignore[arg-type]
        assert prune_error_exit_code(error) == int(ErrorCode.FAILURE) == 1


def test_error_code_values() -> None:
    assert int(ErrorCode.OK) == 0
    assert str(ErrorCode.FAILURE) == "failure"
