"""Core I/O utilities for confloader.

Single source of truth for reading configuration files from disk. The loader
never writes; reads take a shared advisory lock so that deploy tooling which
rewrites configuration under an exclusive ``flock`` is never read mid-write,
while any number of loaders may read the same file at once.
"""
from __future__ import annotations

import fcntl
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def read_text(path: PathLike) -> str:
    """Read a UTF-8 text file under a shared lock.

    Args:
        path: Path to the text file

    Returns:
        str: File contents

    Raises:
        FileNotFoundError: If the file does not exist
        Other I/O errors are propagated to callers
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Text file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        fcntl.flock(f.fileno(), fcntl.LOCK_SH)
        try:
            return f.read()
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)


__all__ = [
    "PathLike",
    "read_text",
]
