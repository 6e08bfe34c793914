"""Filesystem adapter: find configuration files and check working directories."""
from __future__ import annotations

from pathlib import Path

from .exceptions import ResourceNotFoundError
from .utils.io import PathLike


def validate_path(path: PathLike) -> Path:
    """Return ``path`` as an absolute directory, or raise if it does not exist."""
    p = Path(path)
    if not p.is_dir():
        raise ResourceNotFoundError(
            f'The configuration directory "{p}" does not exist.',
            context={"path": str(p)},
        )
    return p.absolute()


def locate(base_path: PathLike, filename: str) -> Path:
    """Return the absolute path of ``filename`` beneath ``base_path``.

    An absolute ``filename`` that already exists is returned as is.

    Raises:
        ResourceNotFoundError: If no such file exists
    """
    name = Path(filename)
    if name.is_absolute() and name.is_file():
        return name

    candidate = Path(base_path) / filename
    if candidate.is_file():
        return candidate.absolute()

    raise ResourceNotFoundError(
        f'The file "{filename}" does not exist (in: {base_path}).',
        context={"file": filename, "path": str(base_path)},
    )


__all__ = ["locate", "validate_path"]
