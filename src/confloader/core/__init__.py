"""confloader core: configuration resolution with recursive imports.

Usage:
    from confloader.core import ConfigLoader

    loader = ConfigLoader(Path("/path/to/config"))
    config = loader.get("app")

    # Loader from CONFLOADER_* environment variables
    loader = ConfigLoader.from_env()
"""
from __future__ import annotations

from .exceptions import (
    ConfigLoaderError,
    DecodeFailureError,
    ImportDepthError,
    InvalidContentError,
    InvalidFormatError,
    ParseFailureError,
    ResourceNotFoundError,
)
from .loader import ConfigLoader, ImportDirective, ResolutionRequest
from .session import LoadSession
from .settings import LoaderSettings, load_settings

__all__ = [
    # Core
    "ConfigLoader",
    "ImportDirective",
    "ResolutionRequest",
    "LoadSession",
    # Settings
    "LoaderSettings",
    "load_settings",
    # Errors
    "ConfigLoaderError",
    "InvalidFormatError",
    "ResourceNotFoundError",
    "ParseFailureError",
    "DecodeFailureError",
    "InvalidContentError",
    "ImportDepthError",
]
