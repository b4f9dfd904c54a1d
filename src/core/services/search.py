"""Mod search."""

from __future__ import annotations

import logging
from typing import Sequence

from adapters.modrinth_api import ModrinthApi
from core.domain.errors import NoResultsError
from core.domain.models import SearchHit
from core.services.facets import build_facets

log = logging.getLogger(__name__)


def search_mods(
    api: ModrinthApi,
    query: str,
    game_version: str,
    categories: Sequence[str] | None = None,
) -> list[SearchHit]:
    """Search mods; raises `NoResultsError` when nothing matches."""

    query = query.strip()
    facets = build_facets(categories, game_version)
    if not facets and game_version:
        log.info("No categories given; game version %s is not applied as a filter", game_version)

    response = api.search(query, facets)
    if not response.hits:
        raise NoResultsError(query)
    return list(response.hits)
