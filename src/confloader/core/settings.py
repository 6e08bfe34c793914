"""Loader settings sourced from keyword arguments and ``CONFLOADER_*`` variables.

Precedence (highest first):
1. Explicit keyword overrides passed to :func:`load_settings` (``None`` = unset)
2. Environment variables:
   - ``CONFLOADER_BASE_PATH``
   - ``CONFLOADER_FORMAT``
   - ``CONFLOADER_VALID_FORMATS`` (comma separated)
   - ``CONFLOADER_MAX_DEPTH``
3. Built-in defaults (current directory, ``yml``, ``yml,yaml,json,php``, unbounded)
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from .formats import DEFAULT_FORMAT, DEFAULT_VALID_FORMATS, normalize_formats, validate_format

ENV_PREFIX = "CONFLOADER_"


@dataclass(frozen=True)
class LoaderSettings:
    base_path: Path
    default_format: str = DEFAULT_FORMAT
    valid_formats: Tuple[str, ...] = DEFAULT_VALID_FORMATS
    max_depth: Optional[int] = None


def _as_int(value: str) -> Optional[int]:
    if re.fullmatch(r"[-+]?\d+", value.strip() or " "):
        return int(value)
    return None


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    raw = environ.get(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def load_settings(environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> LoaderSettings:
    """Build :class:`LoaderSettings` from overrides, the environment and defaults.

    Raises:
        InvalidFormatError: If the default format is not among the valid formats
        ValueError: If ``CONFLOADER_MAX_DEPTH`` is not a non-negative integer
    """
    env = os.environ if environ is None else environ

    base_path = overrides.get("base_path") or _env(env, "BASE_PATH") or Path.cwd()

    raw_formats = overrides.get("valid_formats")
    if raw_formats is None:
        env_formats = _env(env, "VALID_FORMATS")
        raw_formats = env_formats.split(",") if env_formats else None
    valid_formats = normalize_formats(raw_formats)

    default_format = overrides.get("default_format") or _env(env, "FORMAT") or DEFAULT_FORMAT
    default_format = validate_format(str(default_format).lower(), DEFAULT_FORMAT, valid_formats)

    max_depth = overrides.get("max_depth")
    if max_depth is None:
        raw_depth = _env(env, "MAX_DEPTH")
        if raw_depth is not None:
            max_depth = _as_int(raw_depth)
            if max_depth is None:
                raise ValueError(f"{ENV_PREFIX}MAX_DEPTH must be an integer, got {raw_depth!r}")
    if max_depth is not None and int(max_depth) < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    return LoaderSettings(
        base_path=Path(base_path),
        default_format=default_format,
        valid_formats=valid_formats,
        max_depth=None if max_depth is None else int(max_depth),
    )


__all__ = ["ENV_PREFIX", "LoaderSettings", "load_settings"]
