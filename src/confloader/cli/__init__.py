"""
confloader CLI package.

Commands are auto-discovered from ``cli/commands/``: every public module that
defines ``register_args(parser)`` and ``main(args) -> int`` becomes a
subcommand named after the module.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
"""
from ._output import OutputFormatter
from ._args import add_base_path_flag, add_json_flag, add_loader_flags

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_base_path_flag",
    "add_loader_flags",
]
