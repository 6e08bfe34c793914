import json
import sys
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'confloader'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


from confloader.core.log_config import reset_stdlib_logging_for_tests

_ENV_PREFIX = "CONFLOADER_"


@pytest.fixture(autouse=True)
def _isolate_confloader_env(monkeypatch: pytest.MonkeyPatch):
    """Drop CONFLOADER_* variables from the developer's shell and reset logging."""
    import os

    for key in list(os.environ):
        if key.startswith(_ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture()
def config_dir(tmp_path: Path) -> Path:
    """Empty base directory for configuration files."""
    d = tmp_path / "config"
    d.mkdir()
    return d


@pytest.fixture()
def write_config(config_dir: Path) -> Callable[..., Path]:
    """Write a configuration file beneath ``config_dir``.

    Mappings/lists are serialized according to the file suffix (.json -> JSON,
    anything else -> YAML); strings are written verbatim.
    """

    def _write(relpath: str, content: Any) -> Path:
        path = config_dir / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            text = content
        elif path.suffix == ".json":
            text = json.dumps(content)
        else:
            text = yaml.safe_dump(content, sort_keys=False)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
