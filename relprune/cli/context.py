from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

import typer

from relprune.core.config import PruneConfig, resolve_config
from relprune.core.errors import ErrorCode
from relprune.core.result import Err
from relprune.output.console import ConsoleProtocol, RichConsole
from relprune.output.errors import print_config_error
from relprune.services.releases_api import ReleasesApi
from relprune.tools.http import RealHttpClient


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: PruneConfig
    api: ReleasesApi
    console: ConsoleProtocol


def build_context(env: Mapping[str, str] | None = None) -> CLIContext:
    """Resolve configuration once and wire the real HTTP client.

    Exits with a failure status on any configuration error, before any
    network call is made.
    """
    console = RichConsole()
    config_result = resolve_config(os.environ if env is None else env, console)
    if isinstance(config_result, Err):
        print_config_error(config_result.error, console)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    config = config_result.value
    return CLIContext(
        config=config,
        api=ReleasesApi.from_config(RealHttpClient(), config),
        console=console,
    )
