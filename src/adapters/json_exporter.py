"""JSON export of command results.

Used by `--json` so results can be piped into other tools.
"""

from __future__ import annotations

import json
from typing import Sequence

from pydantic import BaseModel


def dump_models_json(payload: BaseModel | Sequence[BaseModel]) -> str:
    """Serialize one model or a list of models to UTF-8 JSON with a stable layout."""

    if isinstance(payload, BaseModel):
        data = payload.model_dump(mode="json")
    else:
        data = [item.model_dump(mode="json") for item in payload]
    return json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True)
