"""Prune command - delete old releases beyond keep_latest."""

from __future__ import annotations

from dataclasses import replace

import typer

from relprune.cli.commands._helpers import exit_on_error
from relprune.cli.context import build_context
from relprune.services.pruner import prune_releases


def prune(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Force a dry run regardless of INPUT_DRY_RUN.",
    ),
) -> None:
    """Delete releases older than the newest keep_latest matches.

    All parameters come from the environment (GITHUB_TOKEN, GITHUB_REPOSITORY,
    INPUT_KEEP_LATEST, ...), so the command runs unchanged as an action step.
    """
    ctx = build_context()
    config = ctx.config
    if dry_run and not config.dry_run:
        ctx.console.info("Dry run forced by --dry-run")
        config = replace(config, dry_run=True)

    ctx.console.header(f"Pruning releases of {config.full_name}")
    exit_on_error(prune_releases(config, ctx.api, ctx.console), ctx)
