"""Per-request resolution state.

A :class:`LoadSession` lives for exactly one top-level ``ConfigLoader.get``
call and is threaded through every nested import it triggers. Nothing here is
module level, so independent calls never observe each other's state.
"""
from __future__ import annotations

import hashlib
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Set, Tuple

from .exceptions import ImportDepthError
from .formats import DEFAULT_FORMAT, DEFAULT_VALID_FORMATS
from .locator import validate_path
from .utils.io import PathLike

logger = logging.getLogger(__name__)


def fingerprint(path: PathLike) -> str:
    """Deterministic hash of a normalized absolute path."""
    normalized = os.path.normpath(os.path.abspath(os.fspath(path)))
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


@dataclass
class LoadSession:
    base_path: Path
    default_format: str = DEFAULT_FORMAT
    valid_formats: Tuple[str, ...] = DEFAULT_VALID_FORMATS
    max_depth: Optional[int] = None
    working_path: Path = field(init=False)
    current_file: Optional[str] = None
    current_format: Optional[str] = None
    depth: int = 0
    seen: Set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.base_path = Path(self.base_path)
        self.working_path = self.base_path

    @classmethod
    def new(
        cls,
        base_path: PathLike,
        default_format: str = DEFAULT_FORMAT,
        valid_formats: Tuple[str, ...] = DEFAULT_VALID_FORMATS,
        *,
        max_depth: Optional[int] = None,
    ) -> "LoadSession":
        """Start a fresh session rooted at ``base_path`` (which must exist)."""
        session = cls(
            base_path=Path(base_path),
            default_format=default_format,
            valid_formats=tuple(valid_formats),
            max_depth=max_depth,
        )
        validate_path(session.base_path)
        return session

    def set_working_path(self, sub_path: Optional[str] = None) -> Path:
        """Point the session at ``base_path`` or ``base_path + sub_path``."""
        self.working_path = self.base_path
        if sub_path and sub_path != str(self.base_path):
            self.working_path = self.base_path / sub_path.lstrip("/")
            logger.debug("Working path switched to %s", self.working_path)
        validate_path(self.working_path)
        return self.working_path

    def check_and_mark(self, absolute_path: PathLike) -> bool:
        """Return True if ``absolute_path`` was already loaded; record it otherwise."""
        key = fingerprint(absolute_path)
        if key in self.seen:
            return True
        self.seen.add(key)
        return False

    def enter_import(self) -> None:
        self.depth += 1
        if self.max_depth is not None and self.depth > self.max_depth:
            raise ImportDepthError(
                f"Configuration imports nested deeper than {self.max_depth} levels "
                f'(while importing "{self.current_file}").',
                depth=self.depth,
                max_depth=self.max_depth,
                context={"file": self.current_file, "path": str(self.working_path)},
            )

    def exit_import(self) -> None:
        self.depth = max(0, self.depth - 1)


__all__ = ["LoadSession", "fingerprint"]
