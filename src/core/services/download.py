"""Mod file download."""

from __future__ import annotations

import logging
from pathlib import Path

from adapters.modrinth_api import ModrinthApi
from core.domain.errors import FileExistsWriteError, NoMatchingFileError
from core.domain.models import DownloadResult, VersionFile

log = logging.getLogger(__name__)


def find_version_file(api: ModrinthApi, project: str, loader: str, game_version: str) -> VersionFile:
    """First file of the first version built for `loader`.

    Selection is first-match in API order; additional files attached to the
    version are ignored.
    """

    for version in api.list_version_files(project, loader, game_version):
        if loader in version.loaders:
            if not version.files:
                break
            return version.files[0]
    raise NoMatchingFileError(project, loader, game_version)


def download_file(
    api: ModrinthApi,
    version_file: VersionFile,
    target_dir: Path,
    *,
    force: bool = False,
) -> DownloadResult:
    # Strip any directory part the API might send along with the name.
    filename = Path(version_file.filename).name
    dest = target_dir / filename
    if dest.exists():
        if not force:
            raise FileExistsWriteError(dest)
        log.warning("Overwriting existing file %s", dest)

    api.download(version_file.url, dest)
    return DownloadResult(filename=filename, url=version_file.url, path=dest)
