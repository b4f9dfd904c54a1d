"""Search facet builder.

Modrinth filters searches with a nested array: the outer list is AND, each
inner list is OR. Every clause here gets its own inner list, so all of them
are required.
"""

from __future__ import annotations

import json
from typing import Iterable, Sequence
from urllib.parse import quote

PROJECT_TYPE_CLAUSE = "project_type=mod"


def render_facets(clauses: Iterable[str]) -> str:
    """Render clauses as `&facets=[["a"],["b"]]`, one required clause each."""

    groups = [[clause] for clause in clauses]
    literal = json.dumps(groups, separators=(",", ":"), ensure_ascii=False)
    # The JSON punctuation stays readable; `&`, `#`, spaces and the like are escaped.
    return "&facets=" + quote(literal, safe='[]",:=')


def build_facets(categories: Sequence[str] | None, game_version: str = "") -> str:
    """Query fragment for a category-filtered search.

    No categories means no facet filter at all, game version included.
    """

    if not categories:
        return ""

    clauses = [PROJECT_TYPE_CLAUSE]
    clauses.extend(f"categories:{category}" for category in categories)
    if game_version:
        clauses.append(f"versions:{game_version}")
    return render_facets(clauses)
