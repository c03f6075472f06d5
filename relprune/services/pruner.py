"""Release pruning: filter, rank, keep the newest, delete the rest.

A run is a single sequential pass:

1. fetch one page of releases
2. classify every release (pattern, pre-release, age, draft)
3. rank the survivors newest-first and keep ``keep_latest`` of them
4. delete (or, in dry run, report) the remaining candidates in rank order,
   stopping at the first failed API call

Nothing here raises or exits; failures come back as ``Err(PruneError)`` and the
CLI decides the exit status.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from relprune.core.result import Err, Ok, Result
from relprune.output.console import Style
from relprune.services.errors import PruneError
from relprune.services.model import (
    Disposition,
    PruneSummary,
    Release,
    RetentionDecision,
    RetentionPlan,
)

if TYPE_CHECKING:
    from relprune.core.config import PruneConfig
    from relprune.output.console import ConsoleProtocol
    from relprune.services.releases_api import ReleasesApi

__all__ = [
    "days_old",
    "classify_release",
    "filter_releases",
    "rank_releases",
    "plan_retention",
    "fetch_plan",
    "prune_releases",
]

_ONE_DAY = timedelta(days=1)
_OLDEST = datetime.min.replace(tzinfo=UTC)


def days_old(published_at: datetime, now: datetime) -> int:
    """Whole days since publication, rounded up (1ms old counts as 1 day)."""
    return math.ceil((now - published_at) / _ONE_DAY)


def classify_release(
    release: Release,
    config: PruneConfig,
    console: ConsoleProtocol,
    now: datetime,
) -> Disposition | None:
    """Return the skip disposition for ``release``, or None if it stays active.

    Rules apply in order and the first match wins; the order only affects
    which skip gets logged.
    """
    if not config.matches_tag(release.tag_name):
        return Disposition.SKIPPED_PATTERN

    if config.prerelease_only and not release.prerelease:
        console.print(
            f"- Skipping {release.tag_name} (prerelease={release.prerelease}) with id {release.id}",
            Style.DIM,
        )
        return Disposition.SKIPPED_NOT_PRERELEASE

    if config.older_than_days is not None and release.published_at is not None:
        age = days_old(release.published_at, now)
        if age <= config.older_than_days:
            console.print(
                f"- Skipping {release.tag_name} with id {release.id}, "
                f"published {release.published_label} ({age} days ago)",
                Style.DIM,
            )
            return Disposition.SKIPPED_TOO_RECENT

    if release.draft:
        return Disposition.SKIPPED_DRAFT

    return None


def filter_releases(
    releases: Sequence[Release],
    config: PruneConfig,
    console: ConsoleProtocol,
    now: datetime,
) -> list[Release]:
    """Return the active set: releases that survive every filter, in input order."""
    return [r for r in releases if classify_release(r, config, console, now) is None]


def rank_releases(releases: Sequence[Release]) -> list[Release]:
    """Newest first. Equal timestamps keep input order; missing ones rank last."""
    return sorted(releases, key=lambda r: r.published_at or _OLDEST, reverse=True)


def plan_retention(
    releases: Sequence[Release],
    config: PruneConfig,
    console: ConsoleProtocol,
    now: datetime,
) -> RetentionPlan:
    """Assign exactly one disposition to every fetched release."""
    skipped: dict[int, Disposition] = {}
    active: list[Release] = []
    for release in releases:
        disposition = classify_release(release, config, console, now)
        if disposition is None:
            active.append(release)
        else:
            skipped[release.id] = disposition

    ranked = rank_releases(active)
    keepers = tuple(ranked[: config.keep_latest])
    candidates = tuple(ranked[config.keep_latest :])
    kept_ids = {r.id for r in keepers}

    decisions: list[RetentionDecision] = []
    for release in releases:
        disposition = skipped.get(release.id)
        if disposition is None:
            disposition = Disposition.KEPT if release.id in kept_ids else Disposition.DELETED
        decisions.append(RetentionDecision(release=release, disposition=disposition))

    return RetentionPlan(decisions=tuple(decisions), keepers=keepers, candidates=candidates)


def fetch_plan(
    config: PruneConfig,
    api: ReleasesApi,
    console: ConsoleProtocol,
    now: datetime | None = None,
) -> Result[RetentionPlan, PruneError]:
    """Fetch the release list and plan it; no deletions."""
    listed = api.list_releases(config.owner, config.repo)
    if isinstance(listed, Err):
        console.error(f"Failed to get list of releases <- {listed.error}")
        return Err(
            PruneError(
                kind="fetch_failed",
                message=f"failed to list releases of {config.full_name}",
                hint=str(listed.error),
            )
        )
    return Ok(plan_retention(listed.value, config, console, now or datetime.now(tz=UTC)))


def _log_keepers(plan: RetentionPlan, config: PruneConfig, console: ConsoleProtocol) -> None:
    matching = " matching" if config.tag_pattern is not None else ""
    console.info(f"Found total of {len(plan.active)}{matching} active release(s)")
    console.print(f"Keeping {len(plan.keepers)} latest release(s):")
    for release in plan.keepers:
        console.print(
            f"- Keeping {release.tag_name} with id {release.id} published {release.published_label}"
        )


def prune_releases(
    config: PruneConfig,
    api: ReleasesApi,
    console: ConsoleProtocol,
    now: datetime | None = None,
) -> Result[PruneSummary, PruneError]:
    """Run one prune pass over ``config.full_name``.

    Args:
        config: Resolved configuration.
        api: Release endpoints.
        console: Diagnostics sink.
        now: Reference time for age checks (defaults to the current UTC time).

    Returns:
        Ok(PruneSummary) on success, including the benign "nothing to do"
        cases; Err(PruneError) on fetch failure or on the first failed delete.
    """
    planned = fetch_plan(config, api, console, now)
    if isinstance(planned, Err):
        return planned
    plan = planned.value

    if not plan.active:
        console.info("No active releases found, nothing to do")
        return Ok(PruneSummary(plan=plan, processed=(), dry_run=config.dry_run))

    _log_keepers(plan, config, console)

    if not plan.candidates:
        console.info("No older releases found, nothing to delete")
        return Ok(PruneSummary(plan=plan, processed=(), dry_run=config.dry_run))

    console.print(f"Found {len(plan.candidates)} older release(s) to delete:", Style.BOLD)

    processed: list[Release] = []
    for release in plan.candidates:
        if config.dry_run:
            console.print(f"- (DRY-RUN) Would delete {release.tag_name} with id {release.id}")
            processed.append(release)
            continue

        console.print(f"- Deleting {release.tag_name} with id {release.id}")
        deleted = api.delete_release(config.owner, config.repo, release.id)
        if isinstance(deleted, Err):
            console.error(f'Failed to delete release with id "{release.id}" <- {deleted.error}')
            return Err(
                PruneError(
                    kind="delete_release_failed",
                    message=f"failed to delete release {release.tag_name} (id {release.id})",
                    hint=str(deleted.error),
                    processed=len(processed),
                )
            )

        if config.delete_tags:
            tag_deleted = api.delete_tag(config.owner, config.repo, release.tag_name)
            if isinstance(tag_deleted, Err):
                console.error(f'Failed to delete tag "{release.tag_name}" <- {tag_deleted.error}')
                # The release is already gone; count it.
                processed.append(release)
                return Err(
                    PruneError(
                        kind="delete_tag_failed",
                        message=f"release {release.id} deleted but tag {release.tag_name} was not",
                        hint=str(tag_deleted.error),
                        processed=len(processed),
                    )
                )

        processed.append(release)

    verb = "would be deleted (dry run)" if config.dry_run else "deleted successfully"
    console.success(f"{len(processed)} older release(s) {verb}")
    return Ok(PruneSummary(plan=plan, processed=tuple(processed), dry_run=config.dry_run))
