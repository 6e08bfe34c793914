"""I/O utilities for confloader.

- Core: locked text reads
- JSON: strict parsing and deterministic dumps
- YAML: safe parsing and dumps
"""
from __future__ import annotations

from .core import (
    PathLike,
    read_text,
)
from .json import (
    DEFAULT_JSON_CONFIG,
    dump_json_string,
    parse_json_string,
)
from .yaml import (
    dump_yaml_string,
    parse_yaml_string,
)

__all__ = [
    # core
    "PathLike",
    "read_text",
    # json
    "DEFAULT_JSON_CONFIG",
    "parse_json_string",
    "dump_json_string",
    # yaml
    "parse_yaml_string",
    "dump_yaml_string",
]
