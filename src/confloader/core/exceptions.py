from __future__ import annotations

from typing import Any, Dict, Mapping


class ConfigLoaderError(Exception):
    """Base exception for configuration resolution."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class InvalidFormatError(ConfigLoaderError, ValueError):
    """Raised for an unknown format name or an unusable executable config."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ConfigLoaderError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ResourceNotFoundError(ConfigLoaderError, FileNotFoundError):
    """Raised when a configuration file or working directory does not exist."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ConfigLoaderError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class ParseFailureError(ConfigLoaderError, ValueError):
    """Raised when the underlying decoder rejects the raw content."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ConfigLoaderError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class DecodeFailureError(ConfigLoaderError):
    """Raised when decoding produced no content where a mapping was expected."""


class InvalidContentError(ConfigLoaderError, ValueError):
    """Raised when decoded content is not a mapping or ``imports`` is malformed."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ConfigLoaderError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ImportDepthError(ConfigLoaderError, RecursionError):
    """Raised when nested imports exceed the configured ``max_depth``."""

    def __init__(
        self,
        message: str,
        *,
        depth: int | None = None,
        max_depth: int | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if depth is not None:
            ctx["depth"] = depth
        if max_depth is not None:
            ctx["max_depth"] = max_depth
        ConfigLoaderError.__init__(self, message, context=ctx)
        RecursionError.__init__(self, message)


__all__ = [
    "ConfigLoaderError",
    "InvalidFormatError",
    "ResourceNotFoundError",
    "ParseFailureError",
    "DecodeFailureError",
    "InvalidContentError",
    "ImportDepthError",
]
