from __future__ import annotations

from pathlib import Path

import pytest

from confloader.core import ConfigLoader, ImportDirective
from confloader.core.exceptions import (
    DecodeFailureError,
    ImportDepthError,
    InvalidContentError,
    InvalidFormatError,
    ParseFailureError,
    ResourceNotFoundError,
)


def test_constructor_validates_default_format(config_dir: Path) -> None:
    with pytest.raises(InvalidFormatError):
        ConfigLoader(config_dir, "ini")


def test_constructor_validates_base_path(tmp_path: Path) -> None:
    with pytest.raises(ResourceNotFoundError):
        ConfigLoader(tmp_path / "missing")


def test_get_appends_default_format(config_dir: Path, write_config) -> None:
    write_config("app.yml", {"name": "demo"})

    loader = ConfigLoader(config_dir)

    assert loader.get("app") == {"name": "demo"}
    assert loader.current_file == "app.yml"
    assert loader.current_path == str(config_dir)


def test_get_with_explicit_format_and_sub_path(config_dir: Path, write_config) -> None:
    write_config("envs/prod/db.json", {"host": "db.internal"})

    loader = ConfigLoader(config_dir)

    assert loader.get("db", "json", "/envs/prod") == {"host": "db.internal"}
    assert loader.current_path == str(config_dir / "envs" / "prod")


def test_accessors_are_none_before_first_get(config_dir: Path) -> None:
    loader = ConfigLoader(config_dir)
    assert loader.current_file is None
    assert loader.current_path is None


def test_missing_file_raises_resource_not_found(config_dir: Path) -> None:
    with pytest.raises(ResourceNotFoundError):
        ConfigLoader(config_dir).get("nope")


def test_empty_file_yields_none(config_dir: Path, write_config) -> None:
    write_config("empty.yml", "")
    write_config("blank.json", "  \n")

    loader = ConfigLoader(config_dir)

    assert loader.get("empty") is None
    assert loader.get("blank.json") is None


def test_comment_only_yaml_is_a_decode_failure(config_dir: Path, write_config) -> None:
    write_config("comments.yml", "# only a comment\n")

    with pytest.raises(DecodeFailureError):
        ConfigLoader(config_dir).get("comments")


def test_empty_mapping_is_accepted(config_dir: Path, write_config) -> None:
    write_config("empty_map.json", "{}")

    assert ConfigLoader(config_dir).get("empty_map.json") == {}


@pytest.mark.parametrize("content", ["[1, 2, 3]", "42", '"text"'])
def test_json_non_mapping_root_is_invalid_content(config_dir: Path, write_config, content: str) -> None:
    write_config("scalar.json", content)

    with pytest.raises(InvalidContentError) as excinfo:
        ConfigLoader(config_dir).get("scalar.json")

    assert excinfo.value.context["file"] == "scalar.json"
    assert excinfo.value.context["format"] == "json"


def test_invalid_json_is_a_parse_failure(config_dir: Path, write_config) -> None:
    write_config("bad.json", "{oops}")

    with pytest.raises(ParseFailureError):
        ConfigLoader(config_dir).get("bad", "json")


def test_current_document_overrides_imports(config_dir: Path, write_config) -> None:
    write_config("base.yml", {"imports": [{"resource": "other.yml"}], "a": 1})
    write_config("other.yml", {"a": 2, "b": 2})

    assert ConfigLoader(config_dir).get("base") == {"a": 1, "b": 2}


def test_later_import_overrides_earlier_import(config_dir: Path, write_config) -> None:
    write_config(
        "base.yml",
        {"imports": [{"resource": "x.yml"}, {"resource": "y.yml"}], "own": True},
    )
    write_config("x.yml", {"k": 1, "only_x": "x"})
    write_config("y.yml", {"k": 2})

    assert ConfigLoader(config_dir).get("base") == {"k": 2, "only_x": "x", "own": True}


def test_nested_mappings_are_merged_not_replaced(config_dir: Path, write_config) -> None:
    write_config("base.yml", {"imports": [{"resource": "other.yml"}], "m": {"x": 1}})
    write_config("other.yml", {"m": {"y": 2}})

    assert ConfigLoader(config_dir).get("base") == {"m": {"x": 1, "y": 2}}


def test_lists_are_merged_by_position(config_dir: Path, write_config) -> None:
    write_config("base.yml", {"imports": [{"resource": "other.yml"}], "hosts": ["primary"]})
    write_config("other.yml", {"hosts": ["a", "b", "c"]})

    assert ConfigLoader(config_dir).get("base") == {"hosts": ["primary", "b", "c"]}


def test_imports_key_is_removed(config_dir: Path, write_config) -> None:
    write_config("base.yml", {"imports": [{"resource": "other.yml"}]})
    write_config("other.yml", {"a": 1})

    result = ConfigLoader(config_dir).get("base")

    assert "imports" not in result
    assert result == {"a": 1}


def test_null_imports_are_ignored(config_dir: Path, write_config) -> None:
    write_config("base.yml", "imports:\nname: demo\n")

    assert ConfigLoader(config_dir).get("base") == {"name": "demo"}


def test_duplicate_import_is_loaded_once(config_dir: Path, write_config) -> None:
    write_config(
        "base.yml",
        {"imports": [{"resource": "counter.yml"}, {"resource": "other.yml"}, {"resource": "counter.yml"}]},
    )
    write_config("counter.yml", {"k": "counter", "items": [1]})
    write_config("other.yml", {"k": "other"})

    # The second counter.yml is skipped, so other.yml stays the last import.
    assert ConfigLoader(config_dir).get("base") == {"k": "other", "items": [1]}


def test_import_cycle_is_skipped_silently(config_dir: Path, write_config) -> None:
    write_config("a.yml", {"imports": [{"resource": "b.yml"}], "from_a": 1})
    write_config("b.yml", {"imports": [{"resource": "a.yml"}], "from_b": 2})

    assert ConfigLoader(config_dir).get("a") == {"from_a": 1, "from_b": 2}


def test_nested_imports_are_resolved_recursively(config_dir: Path, write_config) -> None:
    write_config("app.yml", {"imports": [{"resource": "services.yml"}], "level": "app"})
    write_config("services.yml", {"imports": [{"resource": "defaults.json"}], "level": "services", "svc": 1})
    write_config("defaults.json", {"level": "defaults", "timeout": 30})

    assert ConfigLoader(config_dir).get("app") == {"level": "app", "svc": 1, "timeout": 30}


def test_imports_autodetect_format_from_extension(config_dir: Path, write_config) -> None:
    write_config("base.json", {"imports": [{"resource": "child.yaml"}], "a": 1})
    write_config("child.yaml", {"b": 2})

    assert ConfigLoader(config_dir, "json").get("base") == {"a": 1, "b": 2}


def test_import_without_extension_uses_default_format(config_dir: Path, write_config) -> None:
    write_config("base.json", {"imports": [{"resource": "child"}]})
    write_config("child.json", {"b": 2})

    assert ConfigLoader(config_dir, "json").get("base") == {"b": 2}


def test_sub_path_import_resolves_under_base_joined_with_prefix(config_dir: Path, write_config) -> None:
    write_config("base.yml", {"imports": [{"resource": "/other/dir/file.yml"}]})
    write_config("other/dir/file.yml", {"where": "other/dir"})
    write_config("file.yml", {"where": "base"})

    assert ConfigLoader(config_dir).get("base") == {"where": "other/dir"}


def test_imports_without_sub_path_resolve_under_base(config_dir: Path, write_config) -> None:
    write_config("root.yml", {"imports": [{"resource": "/nested/child.yml"}]})
    write_config("nested/child.yml", {"imports": [{"resource": "shared.yml"}], "child": True})
    write_config("shared.yml", {"shared": "base"})

    assert ConfigLoader(config_dir).get("root") == {"child": True, "shared": "base"}


def test_relative_directory_import_stays_in_filename(config_dir: Path, write_config) -> None:
    write_config("base.yml", {"imports": [{"resource": "parts/db.yml"}]})
    write_config("parts/db.yml", {"db": True})

    assert ConfigLoader(config_dir).get("base") == {"db": True}


def test_missing_import_is_fatal(config_dir: Path, write_config) -> None:
    write_config("base.yml", {"imports": [{"resource": "missing.yml"}]})

    with pytest.raises(ResourceNotFoundError):
        ConfigLoader(config_dir).get("base")


def test_empty_import_contributes_nothing(config_dir: Path, write_config) -> None:
    write_config("base.yml", {"imports": [{"resource": "empty.yml"}], "a": 1})
    write_config("empty.yml", "")

    assert ConfigLoader(config_dir).get("base") == {"a": 1}


@pytest.mark.parametrize(
    "imports",
    [
        "not-a-list",
        [{"file": "x.yml"}],
        [{"resource": 3}],
        ["x.yml"],
    ],
)
def test_malformed_imports_are_invalid_content(config_dir: Path, write_config, imports) -> None:
    write_config("base.yml", {"imports": imports})

    with pytest.raises(InvalidContentError) as excinfo:
        ConfigLoader(config_dir).get("base")

    assert excinfo.value.context["errors"]


def test_python_config_can_import_yaml(config_dir: Path, write_config) -> None:
    write_config(
        "app.py",
        "CONFIG = {'imports': [{'resource': 'defaults.yml'}], 'debug': True}\n",
    )
    write_config("defaults.yml", {"debug": False, "port": 8080})

    loader = ConfigLoader(config_dir, valid_formats=["yml", "yaml", "json", "php", "py"])

    assert loader.get("app.py") == {"debug": True, "port": 8080}


def test_resolution_is_idempotent_across_calls(config_dir: Path, write_config) -> None:
    write_config("base.yml", {"imports": [{"resource": "other.yml"}], "a": {"x": 1}})
    write_config("other.yml", {"a": {"y": 2}, "b": [1, 2]})

    loader = ConfigLoader(config_dir)
    first = loader.get("base")
    second = loader.get("base")

    assert first == second == {"a": {"x": 1, "y": 2}, "b": [1, 2]}
    assert ConfigLoader(config_dir).get("base") == first


def test_max_depth_limits_import_nesting(config_dir: Path, write_config) -> None:
    write_config("a.yml", {"imports": [{"resource": "b.yml"}]})
    write_config("b.yml", {"imports": [{"resource": "c.yml"}]})
    write_config("c.yml", {"c": 1})

    assert ConfigLoader(config_dir, max_depth=2).get("a") == {"c": 1}
    with pytest.raises(ImportDepthError):
        ConfigLoader(config_dir, max_depth=1).get("a")


def test_from_env(config_dir: Path, write_config, monkeypatch: pytest.MonkeyPatch) -> None:
    write_config("app.json", {"a": 1})
    monkeypatch.setenv("CONFLOADER_BASE_PATH", str(config_dir))
    monkeypatch.setenv("CONFLOADER_FORMAT", "json")

    loader = ConfigLoader.from_env()

    assert loader.default_format == "json"
    assert loader.get("app") == {"a": 1}


def test_restricted_valid_formats(config_dir: Path, write_config) -> None:
    write_config("app.json", {"a": 1})

    loader = ConfigLoader(config_dir, "yml", valid_formats=["yml", "yaml"])

    # ".json" is no longer a recognized marker, so ".yml" is appended.
    with pytest.raises(ResourceNotFoundError):
        loader.get("app.json")


@pytest.mark.parametrize(
    "resource, expected",
    [
        ("/other/dir/file.yml", ImportDirective("file.yml", "/other/dir")),
        ("/top.yml", ImportDirective("/top.yml", None)),
        ("sub/file.yml", ImportDirective("sub/file.yml", None)),
        ("file.yml", ImportDirective("file.yml", None)),
    ],
)
def test_import_directive_parse(resource: str, expected: ImportDirective) -> None:
    assert ImportDirective.parse(resource) == expected


def test_name_starting_with_py_gets_default_extension(config_dir: Path, write_config) -> None:
    write_config("app.pypi.yml", {"a": 1})

    loader = ConfigLoader(config_dir)

    assert loader.get("app.pypi") == {"a": 1}
    assert loader.current_file == "app.pypi.yml"


def test_python_format_enabled_from_env(config_dir: Path, write_config, monkeypatch: pytest.MonkeyPatch) -> None:
    write_config("app.py", "CONFIG = {'debug': True}\n")
    monkeypatch.setenv("CONFLOADER_BASE_PATH", str(config_dir))
    monkeypatch.setenv("CONFLOADER_VALID_FORMATS", "yml,py")

    assert ConfigLoader.from_env().get("app.py") == {"debug": True}


def test_self_import_through_parent_segments_is_skipped(config_dir: Path, write_config) -> None:
    (config_dir / "sub").mkdir()
    write_config(
        "a.yml",
        {"imports": [{"resource": "/sub/../a.yml"}, {"resource": "other.yml"}], "own": 1},
    )
    write_config("other.yml", {"other": 2})

    assert ConfigLoader(config_dir).get("a") == {"own": 1, "other": 2}
