"""Canonical JSON serialization for command output.

Byte-stable output: sorted keys, stable separators, UTF-8. Pydantic models
are dumped in JSON mode first so datetimes become ISO 8601 strings.
"""

import json
from typing import Any

from pydantic import BaseModel


def _plain(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, (list, tuple)):
        return [_plain(item) for item in obj]
    if isinstance(obj, dict):
        return {key: _plain(value) for key, value in obj.items()}
    return obj


def canonical_dumps(obj: Any) -> str:
    """
    Canonical JSON serialization.

    Rules:
    - UTF-8 encoding
    - Sorted keys
    - Stable separators (",", ":")
    - List order is preserved (callers decide ordering)

    Args:
        obj: Python object or pydantic model to serialize

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        _plain(obj),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False
    )
