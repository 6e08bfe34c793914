"""Process-wide stdlib logging setup for the confloader CLI.

Library modules only create loggers (``logging.getLogger(__name__)``); handlers
are installed here, once, by the CLI entry point.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED_KEY: Optional[str] = None
_CONFLOADER_HANDLER: Optional[logging.Handler] = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_stdlib_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install a single handler on the root logger.

    Writes to ``log_path`` when given, otherwise to stderr so that stdout stays
    reserved for command output. Idempotent per-process: configuring the same
    destination and level twice is a no-op.
    """
    global _CONFIGURED_KEY, _CONFLOADER_HANDLER

    resolved = str(Path(log_path).resolve()) if log_path is not None else "<stderr>"
    key = f"{resolved}:{level.upper()}"
    if _CONFIGURED_KEY == key and _CONFLOADER_HANDLER is not None:
        return

    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    # Replace the handler installed by a previous call.
    if _CONFLOADER_HANDLER is not None:
        root.removeHandler(_CONFLOADER_HANDLER)
        _CONFLOADER_HANDLER.close()
        _CONFLOADER_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        Path(resolved).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(resolved, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    _CONFLOADER_HANDLER = handler
    _CONFIGURED_KEY = key


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handler installed by :func:`configure_stdlib_logging`."""
    global _CONFIGURED_KEY, _CONFLOADER_HANDLER
    if _CONFLOADER_HANDLER is not None:
        logging.getLogger().removeHandler(_CONFLOADER_HANDLER)
        _CONFLOADER_HANDLER.close()
    _CONFIGURED_KEY = None
    _CONFLOADER_HANDLER = None


__all__ = ["LOG_FORMAT", "configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
