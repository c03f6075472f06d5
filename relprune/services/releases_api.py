"""Thin client for the three release-API endpoints a prune run needs.

All functions return ``Result`` values; transport failures, non-2xx statuses
and malformed payloads all come back as ``HttpError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from relprune.core.config import DEFAULT_API_URL
from relprune.core.result import Err, Ok, Result
from relprune.core.structured import as_obj_list, as_str_dict
from relprune.services.model import Release
from relprune.tools.http import HttpError

if TYPE_CHECKING:
    from relprune.core.config import PruneConfig
    from relprune.tools.http import HttpClient

__all__ = ["ReleasesApi", "RELEASES_PER_PAGE"]

# Single page only; repositories with more releases are pruned over several runs.
RELEASES_PER_PAGE = 100


class ReleasesApi:
    """Release endpoints for one API host, authenticated with a static token."""

    def __init__(self, http: HttpClient, token: str, api_url: str = DEFAULT_API_URL) -> None:
        self._http = http
        self._api_url = api_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "Content-Type": "application/json",
        }

    @classmethod
    def from_config(cls, http: HttpClient, config: PruneConfig) -> ReleasesApi:
        return cls(http, token=config.token, api_url=config.api_url)

    def releases_url(self, owner: str, repo: str) -> str:
        return f"{self._api_url}/repos/{owner}/{repo}/releases"

    def list_releases(self, owner: str, repo: str) -> Result[list[Release], HttpError]:
        """Fetch the first page (up to 100) of releases, newest first as the API lists them."""
        url = f"{self.releases_url(owner, repo)}?per_page={RELEASES_PER_PAGE}"
        result = self._http.request("GET", url, headers=self._headers)
        if isinstance(result, Err):
            return result

        if result.value is None:
            return Ok([])
        items = as_obj_list(result.value)
        if items is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON array of releases"))

        releases: list[Release] = []
        for item in items:
            data = as_str_dict(item)
            release = Release.from_dict(data) if data is not None else None
            if release is None:
                return Err(
                    HttpError(url=url, status=0, message=f"Malformed release entry: {item!r}")
                )
            releases.append(release)
        return Ok(releases)

    def delete_release(self, owner: str, repo: str, release_id: int) -> Result[None, HttpError]:
        url = f"{self.releases_url(owner, repo)}/{release_id}"
        return self._delete(url)

    def delete_tag(self, owner: str, repo: str, tag_name: str) -> Result[None, HttpError]:
        """Delete ``refs/tags/<tag_name>``; the release itself is untouched."""
        ref = quote(tag_name, safe="/")
        url = f"{self._api_url}/repos/{owner}/{repo}/git/refs/tags/{ref}"
        return self._delete(url)

    def _delete(self, url: str) -> Result[None, HttpError]:
        result = self._http.request("DELETE", url, headers=self._headers)
        if isinstance(result, Err):
            return result
        return Ok(None)
