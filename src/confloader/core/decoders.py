"""Format-specific decoders.

Every decoder turns the raw text of one configuration file into a Python
value. Decoders only report whether the text could be understood; whether the
value is an acceptable configuration (a mapping) is decided by the loader.

Registry keys are canonical format names; ``yml`` is an alias of ``yaml``.
"""
from __future__ import annotations

import importlib.util
import json
import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, Mapping

import yaml

from .exceptions import InvalidContentError, InvalidFormatError, ParseFailureError
from .utils.io import parse_json_string, parse_yaml_string

logger = logging.getLogger(__name__)

Decoder = Callable[[str, Path], Any]

_ALIASES: Dict[str, str] = {"yml": "yaml"}

# A top-level ``CONFIG = ...`` (optionally annotated) assignment.
_PY_MARKER = re.compile(r"^CONFIG\s*(?::[^=\n]+)?=", re.MULTILINE)
_PY_NAMESPACE = "confloader.dynamic"


def canonical_format(fmt: str) -> str:
    """Map a format alias to the name its decoder is registered under."""
    return _ALIASES.get(fmt, fmt)


def decode_yaml(content: str, source: Path) -> Any:
    try:
        return parse_yaml_string(content, default=None, raise_on_error=True)
    except yaml.YAMLError as exc:
        raise ParseFailureError(
            f'The requested configuration "{source.name}" could not be parsed: {exc}',
            context={"file": str(source), "format": "yaml"},
        ) from exc


def decode_json(content: str, source: Path) -> Any:
    """Strict JSON decoding; a literal ``null`` document is rejected."""
    try:
        data = parse_json_string(content)
    except json.JSONDecodeError as exc:
        raise ParseFailureError(
            f'The requested configuration "{source.name}" could not be parsed: '
            f"{exc.msg} (line {exc.lineno}, column {exc.colno})",
            context={"file": str(source), "format": "json", "line": exc.lineno, "column": exc.colno},
        ) from exc
    if data is None:
        raise ParseFailureError(
            f'The requested configuration "{source.name}" could not be parsed: document is null',
            context={"file": str(source), "format": "json"},
        )
    return data


def decode_python(content: str, source: Path) -> Any:
    """Execute a Python config module and return its ``CONFIG`` mapping.

    The source must assign ``CONFIG`` at top level; the module is executed from
    ``source`` without being added to ``sys.modules``.
    """
    ctx = {"file": str(source), "format": "py"}
    if not _PY_MARKER.search(content):
        raise InvalidFormatError(
            f'Requested configuration "{source.name}" of type "PY" must assign a CONFIG mapping.',
            context=ctx,
        )

    spec = importlib.util.spec_from_file_location(f"{_PY_NAMESPACE}.{source.stem}", source)
    if spec is None or spec.loader is None:
        raise InvalidFormatError(
            f'Requested configuration "{source.name}" cannot be loaded as a Python module.',
            context=ctx,
        )
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ParseFailureError(
            f'The requested configuration "{source.name}" could not be parsed: {exc}',
            context=ctx,
        ) from exc

    result = getattr(module, "CONFIG", None)
    if not isinstance(result, Mapping):
        raise InvalidContentError(
            f'Requested configuration "{source.name}" of type "PY" does not return valid content.',
            context=ctx,
        )
    return dict(result)


def decode_php(content: str, source: Path) -> Any:
    """PHP configs are recognized but cannot be evaluated here."""
    ctx = {"file": str(source), "format": "php"}
    if "return" not in content.lower():
        raise InvalidFormatError(
            f'Requested configuration "{source.name}" of type "PHP" must return array.',
            context=ctx,
        )
    raise InvalidFormatError(
        f'Requested configuration "{source.name}" of type "PHP" cannot be evaluated by this runtime; '
        "convert it to yaml, json or py.",
        context=ctx,
    )


_DECODERS: Dict[str, Decoder] = {
    "yaml": decode_yaml,
    "json": decode_json,
    "py": decode_python,
    "php": decode_php,
}


def register_decoder(fmt: str, decoder: Decoder) -> None:
    """Register (or replace) the decoder for ``fmt``."""
    _DECODERS[canonical_format(fmt)] = decoder


def registered_formats() -> list[str]:
    """Return all format names that have a decoder, aliases included."""
    names = set(_DECODERS) | {alias for alias, target in _ALIASES.items() if target in _DECODERS}
    return sorted(names)


def get_decoder(fmt: str) -> Decoder:
    decoder = _DECODERS.get(canonical_format(fmt))
    if decoder is None:
        raise InvalidFormatError(
            f"No decoder registered for configuration format [{fmt}].",
            context={"format": fmt},
        )
    return decoder


def decode(fmt: str, content: str, source: Path) -> Any:
    """Decode ``content`` read from ``source`` according to ``fmt``.

    Returns ``None`` when the document is syntactically valid but empty.
    """
    decoder = get_decoder(fmt)
    logger.debug("Decoding %s as %s", source, canonical_format(fmt))
    return decoder(content, Path(source))


__all__ = [
    "Decoder",
    "canonical_format",
    "decode",
    "decode_json",
    "decode_php",
    "decode_python",
    "decode_yaml",
    "get_decoder",
    "register_decoder",
    "registered_formats",
]
