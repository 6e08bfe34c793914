"""JSON parsing and formatting helpers."""
from __future__ import annotations

import json
from typing import Any, Dict

# Default formatting (can be overridden per call)
DEFAULT_JSON_CONFIG: Dict[str, Any] = {
    "indent": 2,
    "sort_keys": True,
    "ensure_ascii": False,
}


def parse_json_string(content: str) -> Any:
    """Strictly parse JSON text.

    Raises:
        json.JSONDecodeError: If ``content`` is not valid JSON
    """
    return json.loads(content)


def dump_json_string(
    data: Any,
    *,
    indent: int | None = None,
    sort_keys: bool | None = None,
) -> str:
    """Serialize ``data`` honoring the default JSON formatting."""
    cfg = dict(DEFAULT_JSON_CONFIG)
    if indent is not None:
        cfg["indent"] = indent
    if sort_keys is not None:
        cfg["sort_keys"] = sort_keys
    return json.dumps(
        data,
        indent=cfg["indent"],
        sort_keys=cfg["sort_keys"],
        ensure_ascii=cfg["ensure_ascii"],
        default=str,
    )


__all__ = [
    "DEFAULT_JSON_CONFIG",
    "parse_json_string",
    "dump_json_string",
]
