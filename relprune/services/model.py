from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from relprune.core.structured import get_bool, get_int, get_str


class Disposition(Enum):
    """What a prune run decided for one fetched release."""

    KEPT = "kept"
    DELETED = "deleted"
    SKIPPED_DRAFT = "skipped-draft"
    SKIPPED_PATTERN = "skipped-pattern"
    SKIPPED_NOT_PRERELEASE = "skipped-not-prerelease"
    SKIPPED_TOO_RECENT = "skipped-too-recent"

    def __str__(self) -> str:
        return self.value

    @property
    def is_skipped(self) -> bool:
        return self not in (Disposition.KEPT, Disposition.DELETED)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an API timestamp ("2024-05-01T12:00:00Z"); naive values are UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


@dataclass(frozen=True, slots=True)
class Release:
    """A release as listed by the API. Read-only."""

    id: int
    tag_name: str
    draft: bool = False
    prerelease: bool = False
    # Drafts have no publish date.
    published_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Release | None:
        """Build from an API payload object; None if id or tag_name is missing."""
        release_id = get_int(data, "id")
        tag_name = data.get("tag_name")
        if release_id is None or not isinstance(tag_name, str):
            return None
        return cls(
            id=release_id,
            tag_name=tag_name,
            draft=get_bool(data, "draft"),
            prerelease=get_bool(data, "prerelease"),
            published_at=parse_timestamp(get_str(data, "published_at")),
        )

    @property
    def published_label(self) -> str:
        if self.published_at is None:
            return "unpublished"
        return self.published_at.isoformat().replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class RetentionDecision:
    release: Release
    disposition: Disposition


@dataclass(frozen=True, slots=True)
class RetentionPlan:
    """Outcome of filtering and ranking one fetched release list.

    ``decisions`` follows fetch order and holds exactly one entry per release;
    ``keepers`` and ``candidates`` follow recency rank (newest first).
    """

    decisions: tuple[RetentionDecision, ...]
    keepers: tuple[Release, ...]
    candidates: tuple[Release, ...]

    @property
    def active(self) -> tuple[Release, ...]:
        return self.keepers + self.candidates


@dataclass(frozen=True, slots=True)
class PruneSummary:
    plan: RetentionPlan
    # Candidates deleted (or, in dry run, reported as would-delete).
    processed: tuple[Release, ...]
    dry_run: bool
