"""YAML parsing and dumping helpers."""
from __future__ import annotations

from typing import Any

import yaml


# Custom representer for multiline strings - use literal block style (|)
def _str_representer(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    """Represent multiline strings with literal block style."""
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


yaml.add_representer(str, _str_representer, Dumper=yaml.SafeDumper)


def parse_yaml_string(content: str, default: Any = None, raise_on_error: bool = False) -> Any:
    """Parse YAML from string with error handling.

    Args:
        content: YAML string content
        default: Value to return on error or empty document (default: None)
        raise_on_error: If True, propagate ``yaml.YAMLError`` instead of
            returning ``default``.

    Returns:
        Parsed data or default
    """
    try:
        data = yaml.safe_load(content)  # type: ignore[no-untyped-call]
    except yaml.YAMLError:
        if raise_on_error:
            raise
        return default
    return data if data is not None else default


def dump_yaml_string(data: Any, sort_keys: bool = True) -> str:
    """Dump data to YAML string.

    Args:
        data: Data to dump
        sort_keys: Whether to sort keys (default: True)

    Returns:
        YAML string
    """
    return yaml.safe_dump(  # type: ignore[no-untyped-call]
        data,
        default_flow_style=False,
        sort_keys=sort_keys,
        allow_unicode=True,
    )


__all__ = [
    "parse_yaml_string",
    "dump_yaml_string",
]
