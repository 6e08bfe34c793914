"""Unified CLI output formatting utilities.

Consistent output formatting for all confloader CLI commands, supporting both
JSON and text output modes.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Optional

from confloader.core.exceptions import ConfigLoaderError
from confloader.core.utils.io import dump_json_string, dump_yaml_string


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON; otherwise output text
            indent: JSON indentation level
        """
        self.json_mode = json_mode
        self.indent = indent

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Output error result.

        In JSON mode, :class:`ConfigLoaderError` instances contribute their
        structured ``to_json_error()`` payload.
        """
        msg = message or str(error)
        if self.json_mode:
            if isinstance(error, ConfigLoaderError):
                output = {"error": error_code, **error.to_json_error()}
                output["message"] = msg
            else:
                output = {"error": error_code, "message": msg}
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        """Output raw JSON data with deterministic key order."""
        print(dump_json_string(data, indent=self.indent))

    def yaml_output(self, data: Any) -> None:
        """Output data as YAML."""
        print(dump_yaml_string(data).rstrip())

    def text(self, message: str) -> None:
        """Output plain text message."""
        print(message)


__all__ = ["OutputFormatter"]
