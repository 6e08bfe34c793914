"""Format detection and filename resolution.

A requested configuration name may or may not carry an extension. The rules:

- The requested format (or the loader default) must be a valid format, even
  when the filename carries its own extension.
- If the filename contains ``.<fmt>`` for any valid format, that format wins
  and nothing is appended. This is a substring match, not a strict suffix
  match, so ``settings.json.dist`` is still JSON.
- When several valid formats occur in the filename, the occurrence found last
  in a left-to-right scan wins (the rightmost one). Two formats matching at
  the same offset are resolved in favour of the longer name.
- Otherwise ``.<requested or default>`` is appended.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

from .exceptions import InvalidFormatError

DEFAULT_FORMAT = "yml"

# ``php`` stays recognized so names and imports written for PHP loaders still
# resolve. The Python-native ``py`` format is opt-in through ``valid_formats``.
DEFAULT_VALID_FORMATS: Tuple[str, ...] = ("yml", "yaml", "json", "php")


def normalize_formats(formats: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """Return a de-duplicated, lower-cased tuple of format names."""
    if formats is None:
        return DEFAULT_VALID_FORMATS
    out: list[str] = []
    for fmt in formats:
        name = str(fmt).strip().lower().lstrip(".")
        if name and name not in out:
            out.append(name)
    if not out:
        raise InvalidFormatError("At least one valid configuration format is required.")
    return tuple(out)


def validate_format(
    fmt: Optional[str],
    default: str = DEFAULT_FORMAT,
    valid_formats: Sequence[str] = DEFAULT_VALID_FORMATS,
) -> str:
    """Check that ``fmt`` (falling back to ``default``) is an allowed format.

    Returns:
        The format that will be used

    Raises:
        InvalidFormatError: If the format is not in ``valid_formats``
    """
    chosen = fmt or default
    if chosen not in valid_formats:
        choices = ", ".join(f'"{f}"' for f in valid_formats)
        raise InvalidFormatError(
            f"Invalid configuration format [{chosen}]; use one of ({choices}).",
            context={"format": chosen, "valid_formats": list(valid_formats)},
        )
    return chosen


def detect_format(filename: str, valid_formats: Sequence[str] = DEFAULT_VALID_FORMATS) -> Optional[str]:
    """Return the format whose ``.<fmt>`` marker occurs last in ``filename``.

    Example:
        >>> detect_format("a.yml.json")
        'json'
        >>> detect_format("settings") is None
        True
    """
    found: Optional[str] = None
    found_at = -1
    for fmt in valid_formats:
        pos = filename.rfind(f".{fmt}")
        if pos < 0:
            continue
        if pos > found_at or (pos == found_at and found is not None and len(fmt) > len(found)):
            found, found_at = fmt, pos
    return found


def resolve_filename(
    filename: str,
    requested: Optional[str] = None,
    default: str = DEFAULT_FORMAT,
    valid_formats: Sequence[str] = DEFAULT_VALID_FORMATS,
) -> Tuple[str, str]:
    """Return ``(final_filename, effective_format)`` for a requested name.

    Example:
        >>> resolve_filename("config.yml", "php")
        ('config.yml', 'yml')
        >>> resolve_filename("config", "json")
        ('config.json', 'json')
    """
    fmt = validate_format(requested, default, valid_formats)
    detected = detect_format(filename, valid_formats)
    if detected is not None:
        return filename, detected
    return f"{filename}.{fmt}", fmt


__all__ = [
    "DEFAULT_FORMAT",
    "DEFAULT_VALID_FORMATS",
    "normalize_formats",
    "validate_format",
    "detect_format",
    "resolve_filename",
]
