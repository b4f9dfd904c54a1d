"""Modrinth v2 REST adapter.

Pure I/O: builds the endpoint URLs, performs the GETs and decodes the bodies
into domain models. Library exceptions (httpx, pydantic, OSError) are
translated into `core.domain.errors` here and nowhere else.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, TypeVar
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from core.config import AppSettings
from core.domain.errors import (
    DecodeError,
    DownloadError,
    NotFoundError,
    ProjectNotFoundError,
    TransportError,
    WriteError,
)
from core.domain.models import (
    ProjectDetail,
    ProjectVersion,
    SearchResponse,
    VersionFileListing,
)

log = logging.getLogger(__name__)

T = TypeVar("T")

_SEARCH = TypeAdapter(SearchResponse)
_PROJECT = TypeAdapter(ProjectDetail)
_VERSION_DEPENDENCIES = TypeAdapter(list[ProjectVersion])
_VERSION_FILES = TypeAdapter(list[VersionFileListing])

# API calls only; downloads keep httpx's default `Accept: */*`.
_JSON_HEADERS = {"Accept": "application/json"}


class ModrinthApi:
    """Thin client over the endpoints the commands need."""

    def __init__(self, client: httpx.Client, settings: AppSettings | None = None) -> None:
        self._client = client
        self._settings = settings or AppSettings()
        self._base_url = self._settings.api_base_url.rstrip("/")

    def search(self, query: str, facets: str = "") -> SearchResponse:
        url = f"{self._base_url}/search?query={quote(query, safe='')}{facets}"
        return self._get_json(url, _SEARCH)

    def get_project(self, project: str) -> ProjectDetail:
        url = f"{self._base_url}/project/{quote(project, safe='')}"
        return self._get_json(url, _PROJECT, not_found=lambda: ProjectNotFoundError(project))

    def list_version_dependencies(self, project: str, loader: str, game_version: str) -> list[ProjectVersion]:
        url = self._versions_url(project, loader, game_version)
        return self._get_json(url, _VERSION_DEPENDENCIES, not_found=lambda: ProjectNotFoundError(project))

    def list_version_files(self, project: str, loader: str, game_version: str) -> list[VersionFileListing]:
        url = self._versions_url(project, loader, game_version)
        return self._get_json(url, _VERSION_FILES, not_found=lambda: ProjectNotFoundError(project))

    def download(self, url: str, dest: Path) -> None:
        """Stream `url` into `dest`.

        The bytes go to a sibling `.part` file that replaces `dest` only once
        complete. Nothing is created when the status is not a success.
        """

        part = dest.with_name(dest.name + ".part")
        log.debug("GET %s -> %s", url, dest)
        try:
            with self._client.stream("GET", url, timeout=self._settings.download_timeout_seconds) as resp:
                log.debug("HTTP %s from %s", resp.status_code, url)
                if not resp.is_success:
                    raise DownloadError(f"couldn't get file from {url} (HTTP {resp.status_code})")
                try:
                    with part.open("wb") as fh:
                        for chunk in resp.iter_bytes():
                            fh.write(chunk)
                    part.replace(dest)
                except OSError as exc:
                    _discard(part)
                    raise WriteError(f"could not write {dest}: {exc}") from exc
        except httpx.HTTPError as exc:
            _discard(part)
            raise TransportError(f"request to {url} failed: {exc}") from exc

    # --- Helpers ---

    def _versions_url(self, project: str, loader: str, game_version: str) -> str:
        # Filters are single-element JSON array literals; only the values are escaped.
        project, loader, game_version = (quote(v, safe="") for v in (project, loader, game_version))
        return (
            f"{self._base_url}/project/{project}/version"
            f'?loader=["{loader}"]&game_versions=["{game_version}"]'
        )

    def _get_json(
        self,
        url: str,
        adapter: TypeAdapter[T],
        *,
        not_found: Callable[[], NotFoundError] | None = None,
    ) -> T:
        log.debug("GET %s", url)
        try:
            resp = self._client.get(url, headers=_JSON_HEADERS)
        except httpx.HTTPError as exc:
            raise TransportError(f"request to {url} failed: {exc}") from exc

        log.debug("HTTP %s from %s", resp.status_code, url)
        if resp.status_code == 404 and not_found is not None:
            raise not_found()
        if not resp.is_success:
            raise TransportError(f"{url} answered HTTP {resp.status_code}")

        try:
            return adapter.validate_json(resp.content)
        except ValidationError as exc:
            raise DecodeError(f"unexpected response from {url}: {exc}") from exc


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        log.warning("Could not remove partial file %s: %s", path, exc)
