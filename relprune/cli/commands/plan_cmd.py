"""Plan command - show the disposition of every release without deleting."""

from __future__ import annotations

from relprune.cli.commands._helpers import exit_on_error
from relprune.cli.context import build_context
from relprune.services.model import RetentionPlan
from relprune.services.pruner import fetch_plan

_COLUMNS = ("Tag", "ID", "Published", "Pre-release", "Draft", "Decision")


def plan_rows(plan: RetentionPlan) -> list[list[str]]:
    """One row per fetched release, in API order."""
    rows: list[list[str]] = []
    for decision in plan.decisions:
        r = decision.release
        rows.append(
            [
                r.tag_name,
                str(r.id),
                r.published_label,
                "yes" if r.prerelease else "no",
                "yes" if r.draft else "no",
                str(decision.disposition),
            ]
        )
    return rows


def plan() -> None:
    """List every release with the decision a prune run would take."""
    ctx = build_context()
    config = ctx.config

    retention = exit_on_error(fetch_plan(config, ctx.api, ctx.console), ctx)
    ctx.console.table(f"Releases of {config.full_name}", _COLUMNS, plan_rows(retention))
    skipped = sum(1 for d in retention.decisions if d.disposition.is_skipped)
    ctx.console.info(
        f"{len(retention.keepers)} kept, {len(retention.candidates)} to delete, {skipped} skipped"
    )
