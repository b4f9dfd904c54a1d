"""Domain models (Pydantic v2).

These mirror the Modrinth v2 response shapes the client reads. Only the
fields the commands use are declared; anything else in the payload is
ignored. Instances are frozen: decoded once, read, discarded.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class SearchHit(_ApiModel):
    """A single search result."""

    slug: str = Field(..., description="Human-readable project identifier.")
    title: str = Field(..., description="Display name of the project.")
    description: str = Field(..., description="Short one-line summary.")


class SearchResponse(_ApiModel):
    hits: list[SearchHit] = Field(..., description="Matching projects, in API order.")
    total_hits: int | None = Field(default=None, ge=0)


class ProjectDetail(_ApiModel):
    """Full project lookup (`/project/<id>`)."""

    slug: str
    title: str
    project_type: str = Field(..., description="mod, modpack, resourcepack, shader, ...")
    body: str = Field(..., description="Long description (markdown).")
    categories: list[str] = Field(..., description="Category tags, in API order.")


class ProjectDependency(_ApiModel):
    """One entry of a version's dependency list.

    `dependency_type` is one of required/optional/incompatible/embedded by API
    convention; it is not checked here. `project_id` is null for dependencies
    pinned only by version or file.
    """

    project_id: str | None = None
    dependency_type: str
    version_id: str | None = None
    file_name: str | None = None


class ProjectVersion(_ApiModel):
    """Version list entry, read for its dependencies."""

    dependencies: list[ProjectDependency]


class VersionFile(_ApiModel):
    url: str = Field(..., min_length=1)
    filename: str = Field(..., min_length=1)


class VersionFileListing(_ApiModel):
    """Version list entry, read for its loaders and files."""

    loaders: frozenset[str]
    files: list[VersionFile]


class ResolvedDependency(_ApiModel):
    """A dependency joined with the project it points to."""

    dependency_type: str
    title: str
    slug: str


class DownloadResult(_ApiModel):
    filename: str
    url: str
    path: Path
