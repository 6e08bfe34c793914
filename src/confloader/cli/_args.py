"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_base_path_flag(parser: argparse.ArgumentParser) -> None:
    """Add --base-path flag (falls back to CONFLOADER_BASE_PATH, then cwd)."""
    parser.add_argument(
        "--base-path",
        type=str,
        help="Base directory of the configuration files",
    )


def add_loader_flags(parser: argparse.ArgumentParser) -> None:
    """Add flags that shape the ConfigLoader itself."""
    add_base_path_flag(parser)
    parser.add_argument(
        "--default-format",
        type=str,
        help="Format appended to names without extension (default: yml)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        help="Fail when imports nest deeper than this (default: unbounded)",
    )


__all__ = [
    "add_json_flag",
    "add_base_path_flag",
    "add_loader_flags",
]
