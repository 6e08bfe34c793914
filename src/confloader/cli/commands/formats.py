"""
confloader formats command.

SUMMARY: List configuration formats

Shows which formats the loader accepts and which of them have a decoder.
"""

from __future__ import annotations

import argparse

from confloader.cli import OutputFormatter, add_json_flag
from confloader.core import ConfigLoaderError, load_settings
from confloader.core.decoders import canonical_format, registered_formats

SUMMARY = "List configuration formats"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        settings = load_settings()
    except (ConfigLoaderError, ValueError) as e:
        formatter.error(e)
        return 1

    decoders = set(registered_formats())
    rows = [
        {
            "format": fmt,
            "decoder": canonical_format(fmt) if fmt in decoders else None,
            "default": fmt == settings.default_format,
        }
        for fmt in settings.valid_formats
    ]

    if formatter.json_mode:
        formatter.json_output({"formats": rows})
        return 0

    for row in rows:
        marker = " (default)" if row["default"] else ""
        decoder = row["decoder"] or "no decoder"
        formatter.text(f"{row['format']}: {decoder}{marker}")
    return 0
