"""Prune configuration resolved from the process environment.

The environment is read exactly once, at startup, into an immutable
``PruneConfig`` that is passed explicitly to the pruner. Variable names follow
the GitHub Actions convention (``GITHUB_*`` context plus ``INPUT_*`` action
inputs) so the tool runs unchanged as an action step.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .result import Err, Ok, Result
from .structured import get_str, parse_number

if TYPE_CHECKING:
    from relprune.output.console import ConsoleProtocol

__all__ = [
    "PruneConfig",
    "ConfigError",
    "resolve_config",
    "DEFAULT_API_URL",
    "ENV_TOKEN",
    "ENV_REPOSITORY",
    "ENV_REPO_OVERRIDE",
    "ENV_KEEP_LATEST",
    "ENV_DRY_RUN",
    "ENV_DELETE_TAGS",
    "ENV_PRE_RELEASE_ONLY",
    "ENV_OLDER_THAN",
    "ENV_TAG_PATTERN",
    "ENV_API_URL",
]

# -----------------------------------------------------------------------------
# Environment variable names
# -----------------------------------------------------------------------------

ENV_TOKEN = "GITHUB_TOKEN"
ENV_REPOSITORY = "GITHUB_REPOSITORY"
ENV_API_URL = "GITHUB_API_URL"
ENV_REPO_OVERRIDE = "INPUT_REPO"
ENV_KEEP_LATEST = "INPUT_KEEP_LATEST"
ENV_DRY_RUN = "INPUT_DRY_RUN"
ENV_DELETE_TAGS = "INPUT_DELETE_TAGS"
ENV_PRE_RELEASE_ONLY = "INPUT_PRE_RELEASE_ONLY"
ENV_OLDER_THAN = "INPUT_OLDER_THAN"
ENV_TAG_PATTERN = "INPUT_DELETE_TAG_PATTERN"

DEFAULT_API_URL = "https://api.github.com"

_NON_NEGATIVE_INT = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Fatal configuration problem, reported before any network call."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class PruneConfig:
    """Validated operating parameters for one prune run."""

    token: str
    owner: str
    repo: str
    keep_latest: int
    dry_run: bool = True
    delete_tags: bool = False
    prerelease_only: bool = True
    # None means no age floor at all (not the same as 0).
    older_than_days: float | None = None
    tag_pattern: re.Pattern[str] | None = None
    api_url: str = DEFAULT_API_URL

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def matches_tag(self, tag_name: str) -> bool:
        if self.tag_pattern is None:
            return True
        return self.tag_pattern.search(tag_name) is not None


def _split_repository(value: str) -> tuple[str, str] | None:
    parts = value.split("/")
    if len(parts) != 2:
        return None
    owner, repo = (p.strip() for p in parts)
    if not owner or not repo:
        return None
    return owner, repo


def resolve_config(
    env: Mapping[str, str],
    console: ConsoleProtocol,
) -> Result[PruneConfig, ConfigError]:
    """Read and validate prune parameters from an environment mapping.

    Args:
        env: Flat name -> value mapping, normally ``os.environ``.
        console: Receives notices and warnings (e.g. keep_latest == 0).

    Returns:
        Ok(PruneConfig), or Err(ConfigError) for a missing or invalid
        required value.
    """
    token = get_str(env, ENV_TOKEN)
    if token is None:
        return Err(ConfigError(f"No {ENV_TOKEN} found", hint=f"pass `{ENV_TOKEN}` as env"))

    context_repo = get_str(env, ENV_REPOSITORY)
    if context_repo is None:
        return Err(
            ConfigError(f"No {ENV_REPOSITORY} found", hint=f"pass `{ENV_REPOSITORY}` as env")
        )

    override = get_str(env, ENV_REPO_OVERRIDE)
    if override is None:
        console.info("No `repo` name given, falling back to this repository")
    repository = override or context_repo

    split = _split_repository(repository)
    if split is None:
        return Err(
            ConfigError(
                f"Either owner or repo name is empty in '{repository}'",
                hint="expected the form owner/repo",
            )
        )
    owner, repo = split

    keep_raw = get_str(env, ENV_KEEP_LATEST)
    if keep_raw is None:
        return Err(ConfigError("No `keep_latest` given", hint=f"set {ENV_KEEP_LATEST}"))
    if not _NON_NEGATIVE_INT.fullmatch(keep_raw):
        return Err(
            ConfigError(
                f"Invalid `keep_latest` given: '{keep_raw}'",
                hint="expected a non-negative integer",
            )
        )
    keep_latest = int(keep_raw)
    if keep_latest == 0:
        console.warning("Given `keep_latest` is 0, this will wipe out all matching releases")

    dry_run = env.get(ENV_DRY_RUN) != "false"
    if dry_run:
        console.info("Dry run: nothing will be deleted")

    delete_tags = env.get(ENV_DELETE_TAGS) == "true"
    if delete_tags:
        console.info("Corresponding git tags will also be deleted")

    prerelease_only = env.get(ENV_PRE_RELEASE_ONLY) != "false"
    if prerelease_only:
        console.info("Only pre-releases will be deleted")

    older_than_days: float | None = None
    older_raw = get_str(env, ENV_OLDER_THAN)
    if older_raw is not None:
        older_than_days = parse_number(older_raw)
        if older_than_days is None:
            console.warning(f"Ignoring non-numeric `older_than` '{older_raw}', no age floor applied")

    tag_pattern: re.Pattern[str] | None = None
    pattern_raw = env.get(ENV_TAG_PATTERN, "")
    if pattern_raw:
        try:
            tag_pattern = re.compile(pattern_raw)
        except re.error as e:
            return Err(ConfigError(f"Invalid tag pattern '{pattern_raw}': {e}"))
        console.info(f"Releases matching regex '{pattern_raw}' will be targeted")

    api_url = (get_str(env, ENV_API_URL) or DEFAULT_API_URL).rstrip("/")

    return Ok(
        PruneConfig(
            token=token,
            owner=owner,
            repo=repo,
            keep_latest=keep_latest,
            dry_run=dry_run,
            delete_tags=delete_tags,
            prerelease_only=prerelease_only,
            older_than_days=older_than_days,
            tag_pattern=tag_pattern,
            api_url=api_url,
        )
    )
