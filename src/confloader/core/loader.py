"""Configuration resolution with recursive ``imports`` support.

Usage:
    from confloader.core.loader import ConfigLoader

    loader = ConfigLoader("/etc/myapp", default_format="yml")
    config = loader.get("app")                      # app.yml
    config = loader.get("db", "json", "/override")  # /etc/myapp/override/db.json

Any document may carry a top-level ``imports`` list::

    imports:
      - { resource: 'parameters.yml' }
      - { resource: '/shared/logging.json' }

Imported documents are merged beneath the importing one: the importing
document always wins, and later imports win over earlier ones. Each file is
loaded at most once per ``get`` call; repeats are skipped silently.

Every ``imports`` entry must carry a non-empty string ``resource``. Entries
without one raise :class:`InvalidContentError` instead of being skipped the
way the PHP loaders this format comes from skip them.
"""
from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .decoders import decode
from .exceptions import (
    DecodeFailureError,
    InvalidContentError,
    ParseFailureError,
)
from .formats import DEFAULT_FORMAT, normalize_formats, resolve_filename, validate_format
from .locator import locate, validate_path
from .schemas import SchemaValidationError, validate_payload
from .session import LoadSession
from .settings import LoaderSettings, load_settings
from .utils.io import PathLike, read_text
from .utils.merge import replace_recursive

logger = logging.getLogger(__name__)

IMPORTS_KEY = "imports"
IMPORTS_SCHEMA = "imports"


@dataclass(frozen=True)
class ResolutionRequest:
    name: str
    fmt: Optional[str] = None
    path: Optional[str] = None


@dataclass(frozen=True)
class ImportDirective:
    resource: str
    path: Optional[str] = None

    @classmethod
    def parse(cls, resource: str) -> "ImportDirective":
        """Split an absolute-looking directory prefix off ``resource``.

        Example:
            >>> ImportDirective.parse("/other/dir/file.yml")
            ImportDirective(resource='file.yml', path='/other/dir')
            >>> ImportDirective.parse("sub/file.yml")
            ImportDirective(resource='sub/file.yml', path=None)
        """
        dirname = posixpath.dirname(resource)
        if len(dirname) > 1 and dirname.startswith("/"):
            return cls(resource=resource[len(dirname) + 1 :], path=dirname)
        return cls(resource=resource)


class ConfigLoader:
    """Resolve configuration files beneath ``base_path`` and expand their imports."""

    def __init__(
        self,
        base_path: PathLike,
        default_format: str = DEFAULT_FORMAT,
        *,
        valid_formats: Optional[Iterable[str]] = None,
        max_depth: Optional[int] = None,
    ) -> None:
        """
        Args:
            base_path: Base directory of the configuration files
            default_format: Format appended to names without extension
            valid_formats: Allowed formats (default: yml, yaml, json, php; add "py" for Python configs)
            max_depth: Optional limit on import nesting; unbounded when None
        """
        self.valid_formats = normalize_formats(valid_formats)
        self.default_format = validate_format(default_format, DEFAULT_FORMAT, self.valid_formats)
        self.base_path = validate_path(base_path)
        self.max_depth = max_depth
        self._current_file: Optional[str] = None
        self._current_path: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: LoaderSettings) -> "ConfigLoader":
        return cls(
            settings.base_path,
            settings.default_format,
            valid_formats=settings.valid_formats,
            max_depth=settings.max_depth,
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> "ConfigLoader":
        """Build a loader from ``CONFLOADER_*`` environment variables."""
        return cls.from_settings(load_settings(**overrides))

    @property
    def current_file(self) -> Optional[str]:
        """File name resolved last by :meth:`get`."""
        return self._current_file

    @property
    def current_path(self) -> Optional[str]:
        """Working directory used last by :meth:`get`."""
        return self._current_path

    def get(self, name: str, fmt: Optional[str] = None, path: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Load a configuration file and return its merged contents.

        Args:
            name: File name, with or without extension
            fmt: File format; autodetected from ``name`` or the default when None
            path: Sub-path appended to the base path

        Returns:
            The merged configuration, or None when the file is empty

        Example:
            >>> loader.get("config_file.yml")
            >>> loader.get("config_file", "yml", "/path/configuration")
        """
        session = LoadSession.new(
            self.base_path,
            self.default_format,
            self.valid_formats,
            max_depth=self.max_depth,
        )
        try:
            return self._load(session, ResolutionRequest(name, fmt, path))
        finally:
            self._current_file = session.current_file
            self._current_path = str(session.working_path)

    def _load(self, session: LoadSession, request: ResolutionRequest) -> Optional[Dict[str, Any]]:
        filename, fmt = resolve_filename(
            request.name,
            request.fmt,
            session.default_format,
            session.valid_formats,
        )
        session.current_file = filename
        session.current_format = fmt
        working_path = session.set_working_path(request.path)

        if session.check_and_mark(working_path / filename):
            logger.debug("Skipping %s in %s: already loaded", filename, working_path)
            return None

        location = locate(working_path, filename)
        content = self._read(location, fmt)
        if not content.strip():
            logger.debug("Skipping %s: file is empty", location)
            return None

        config = decode(fmt, content, location)
        self._validate_config(config, filename, fmt)
        if IMPORTS_KEY not in config:
            return config
        return self._import_resources(session, config, filename, fmt)

    def _read(self, location: Path, fmt: str) -> str:
        try:
            return read_text(location)
        except UnicodeDecodeError as exc:
            raise ParseFailureError(
                f'The requested configuration "{location.name}" is not valid UTF-8 text: {exc}',
                context={"file": str(location), "format": fmt},
            ) from exc
        except OSError as exc:
            logger.warning("Skipping unreadable configuration %s: %s", location, exc)
            return ""

    def _validate_config(self, config: Any, filename: str, fmt: str) -> None:
        if config is None:
            raise DecodeFailureError(
                f'The requested configuration "{filename}" could not be parsed',
                context={"file": filename, "format": fmt},
            )
        if not isinstance(config, dict):
            raise InvalidContentError(
                f'Requested configuration "{filename}" of type "{fmt.upper()}" does not return valid content.',
                context={"file": filename, "format": fmt, "type": type(config).__name__},
            )

    def _import_resources(
        self,
        session: LoadSession,
        config: Dict[str, Any],
        filename: str,
        fmt: str,
    ) -> Dict[str, Any]:
        """Resolve ``config['imports']`` and merge the results beneath ``config``."""
        entries = config[IMPORTS_KEY]
        document = {k: v for k, v in config.items() if k != IMPORTS_KEY}
        if entries is None:
            return document

        try:
            validate_payload(entries, IMPORTS_SCHEMA)
        except SchemaValidationError as exc:
            raise InvalidContentError(
                f'Requested configuration "{filename}" has invalid imports: {"; ".join(exc.errors)}',
                context={"file": filename, "format": fmt, "errors": exc.errors},
            ) from exc

        imported: List[Dict[str, Any]] = []
        for entry in entries:
            directive = ImportDirective.parse(entry["resource"])
            session.enter_import()
            try:
                resource = self._load(session, ResolutionRequest(directive.resource, None, directive.path))
            finally:
                session.exit_import()
            if resource:
                imported.append(resource)

        merged: Dict[str, Any] = {}
        for resource in imported:
            merged = replace_recursive(merged, resource)
        logger.debug("Merged %d import(s) beneath %s", len(imported), filename)
        return replace_recursive(merged, document)


__all__ = ["ConfigLoader", "ImportDirective", "ResolutionRequest", "IMPORTS_KEY"]
