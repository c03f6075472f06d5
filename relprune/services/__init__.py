"""Release pruning services."""

from .errors import PruneError
from .model import Disposition, PruneSummary, Release, RetentionDecision, RetentionPlan
from .pruner import fetch_plan, filter_releases, plan_retention, prune_releases
from .releases_api import ReleasesApi

__all__ = [
    "Disposition",
    "PruneError",
    "PruneSummary",
    "Release",
    "ReleasesApi",
    "RetentionDecision",
    "RetentionPlan",
    "fetch_plan",
    "filter_releases",
    "plan_retention",
    "prune_releases",
]
