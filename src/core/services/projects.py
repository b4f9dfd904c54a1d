"""Project lookups: detail and dependency resolution."""

from __future__ import annotations

import logging

from adapters.modrinth_api import ModrinthApi
from core.domain.errors import NoDependenciesError, NoVersionsError
from core.domain.models import ProjectDetail, ResolvedDependency

log = logging.getLogger(__name__)


def project_info(api: ModrinthApi, project: str) -> ProjectDetail:
    return api.get_project(project)


def project_dependencies(
    api: ModrinthApi,
    project: str,
    loader: str,
    game_version: str,
) -> list[ResolvedDependency]:
    """Resolve the dependencies of the newest matching version.

    Only the first version returned by the API is consulted. Each dependency
    costs one extra project lookup; results keep the API's order.
    """

    versions = api.list_version_dependencies(project, loader, game_version)
    if not versions:
        raise NoVersionsError(project, loader, game_version)

    dependencies = versions[0].dependencies
    if not dependencies:
        raise NoDependenciesError(project)

    resolved: list[ResolvedDependency] = []
    for dependency in dependencies:
        if not dependency.project_id:
            log.warning(
                "Skipping %s dependency without a project id (version=%s, file=%s)",
                dependency.dependency_type,
                dependency.version_id,
                dependency.file_name,
            )
            continue
        target = api.get_project(dependency.project_id)
        resolved.append(
            ResolvedDependency(
                dependency_type=dependency.dependency_type,
                title=target.title,
                slug=target.slug,
            )
        )
    if not resolved:
        raise NoDependenciesError(project)
    return resolved
