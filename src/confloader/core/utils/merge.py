"""Canonical recursive-replace merge.

This module is the single source of truth for folding imported configuration
documents beneath the document that imports them.

Semantics:
- Dictionaries merge key by key
- Lists merge position by position (index ``i`` of the override replaces or
  merges into index ``i`` of the base; extra override items are appended)
- Where both sides hold the same kind of container, the merge recurses
- Anything else: the override value replaces the base value
"""
from __future__ import annotations

from typing import Any, Dict, List


def _merge_value(base: Any, override: Any) -> Any:
    if isinstance(base, dict) and isinstance(override, dict):
        return replace_recursive(base, override)
    if isinstance(base, list) and isinstance(override, list):
        return merge_positional(base, override)
    return override


def replace_recursive(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into ``base`` without mutating inputs.

    Args:
        base: Base dictionary (lower priority)
        override: Override dictionary (higher priority)

    Returns:
        New merged dictionary

    Example:
        >>> replace_recursive({"m": {"x": 1}, "l": [1, 2, 3]}, {"m": {"y": 2}, "l": [9]})
        {'m': {'x': 1, 'y': 2}, 'l': [9, 2, 3]}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result:
            result[key] = _merge_value(result[key], value)
        else:
            result[key] = value
    return result


def merge_positional(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge two lists index by index.

    Example:
        >>> merge_positional([1, {"a": 1}], [None, {"b": 2}, 3])
        [None, {'a': 1, 'b': 2}, 3]
    """
    result: List[Any] = list(base)
    for index, value in enumerate(override):
        if index < len(result):
            result[index] = _merge_value(result[index], value)
        else:
            result.append(value)
    return result


__all__ = ["replace_recursive", "merge_positional"]
