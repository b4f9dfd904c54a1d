"""Error taxonomy.

Every failure a command can hit maps onto one of these classes. The CLI turns
them into a message on stderr and a process exit code.
"""

from __future__ import annotations


class PydrinthError(Exception):
    """Base class for all expected failures."""

    exit_code = 1


class TransportError(PydrinthError):
    """Network, DNS, TLS or timeout failure, or an unexpected HTTP status."""

    exit_code = 3


class DecodeError(PydrinthError):
    """Response body does not match the expected shape."""

    exit_code = 4


class NotFoundError(PydrinthError):
    """Semantically empty result."""

    exit_code = 5


class ProjectNotFoundError(NotFoundError):
    def __init__(self, project: str) -> None:
        super().__init__(f"project '{project}' not found")
        self.project = project


class NoResultsError(NotFoundError):
    def __init__(self, query: str) -> None:
        super().__init__(f"no mods found matching the query '{query}'")
        self.query = query


class NoVersionsError(NotFoundError):
    def __init__(self, project: str, loader: str, game_version: str) -> None:
        super().__init__(
            f"no versions of '{project}' found for loader '{loader}' at game version '{game_version}'"
        )
        self.project = project
        self.loader = loader
        self.game_version = game_version


class NoDependenciesError(NotFoundError):
    def __init__(self, project: str) -> None:
        super().__init__(f"no dependencies found for this version of '{project}'")
        self.project = project


class NoMatchingFileError(NotFoundError):
    def __init__(self, project: str, loader: str, game_version: str) -> None:
        super().__init__(
            f"no file of '{project}' found for loader '{loader}' at game version '{game_version}'"
        )
        self.project = project
        self.loader = loader
        self.game_version = game_version


class DownloadError(PydrinthError):
    """The file URL answered with a non-success status."""

    exit_code = 6


class WriteError(PydrinthError):
    """Local filesystem failure while saving a download."""

    exit_code = 7


class FileExistsWriteError(WriteError):
    def __init__(self, path: object) -> None:
        super().__init__(f"{path} already exists (use --force to overwrite)")
        self.path = path


class ConfigError(PydrinthError):
    """Invalid `PYDRINTH_*` setting or `.env` entry."""
