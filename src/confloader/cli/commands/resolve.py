"""
confloader resolve command.

SUMMARY: Resolve a configuration file and its imports

Loads NAME beneath the base path, expands every ``imports`` directive and
prints the merged document.
"""

from __future__ import annotations

import argparse

from confloader.cli import OutputFormatter, add_json_flag, add_loader_flags
from confloader.core import ConfigLoader, ConfigLoaderError, load_settings

SUMMARY = "Resolve a configuration file and its imports"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "name",
        help="Configuration name, with or without extension (e.g. 'app' or 'app.json')",
    )
    parser.add_argument(
        "--format",
        dest="fmt",
        help="Format to use when NAME has no extension",
    )
    parser.add_argument(
        "--path",
        help="Sub-path appended to the base path (e.g. '/environments/prod')",
    )
    parser.add_argument(
        "--output",
        choices=["json", "yaml"],
        default="yaml",
        help="Output format (default: yaml)",
    )
    add_loader_flags(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Resolve configuration - delegates to ConfigLoader."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        settings = load_settings(
            base_path=args.base_path,
            default_format=args.default_format,
            max_depth=args.max_depth,
        )
        loader = ConfigLoader.from_settings(settings)
        config = loader.get(args.name, args.fmt, args.path)
    except (ConfigLoaderError, ValueError) as e:
        formatter.error(e, error_code=e.__class__.__name__)
        return 1

    if config is None:
        config = {}

    if args.json:
        formatter.json_output(
            {
                "file": loader.current_file,
                "path": loader.current_path,
                "config": config,
            }
        )
    elif args.output == "json":
        formatter.json_output(config)
    else:
        formatter.yaml_output(config)
    return 0
