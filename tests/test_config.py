import json
from pathlib import Path

import pytest

from appimager.config import (
    ImageParams,
    LauncherOverride,
    LauncherParams,
    RelativeFileSet,
    load_params,
    merge_launcher,
)
from appimager.errors import ConfigError


def test_launcher_requires_entry_point():
    with pytest.raises(ConfigError):
        LauncherParams(name="App")


@pytest.mark.parametrize("name", ["", "a/b", "a\\b"])
def test_launcher_name_is_checked(name):
    with pytest.raises(ConfigError):
        LauncherParams(name=name, main_class="Main")


def test_identifier_defaults_to_name():
    params = LauncherParams(name="App", main_class="Main")

    assert params.effective_identifier == "App"
    assert LauncherParams(name="App", main_class="Main", identifier="org.app").effective_identifier == "org.app"


def test_included_files_are_deduplicated_in_order(tmp_path: Path):
    file_set = RelativeFileSet(
        base_dir=tmp_path,
        included_files=["b.txt", "a.txt", "b.txt"],
    )

    assert file_set.included_files == ["b.txt", "a.txt"]


@pytest.mark.parametrize("name", ["/etc/passwd", "../secret", "sub/../../x"])
def test_included_files_stay_below_base(tmp_path: Path, name):
    with pytest.raises(ConfigError):
        RelativeFileSet(base_dir=tmp_path, included_files=[name])


def test_scan_collects_all_files(app_input: Path):
    file_set = RelativeFileSet.scan(app_input)

    assert file_set.base_dir == app_input
    assert file_set.included_files == ["a.txt", "app.jar", "sub/b.txt"]


def test_scan_rejects_missing_directory(tmp_path: Path):
    with pytest.raises(ConfigError):
        RelativeFileSet.scan(tmp_path / "missing")


def test_duplicate_launcher_names_rejected():
    with pytest.raises(ConfigError):
        ImageParams(
            name="App",
            main_class="Main",
            add_launchers=[LauncherOverride(name="Tool"), LauncherOverride(name="App")],
        )


def test_merge_overrides_only_given_fields(params: ImageParams):
    merged = merge_launcher(
        params,
        LauncherOverride(name="App2", main_class="com.example.Tool", arguments=[]),
    )

    assert isinstance(merged, LauncherParams)
    assert not isinstance(merged, ImageParams)
    assert merged.name == "App2"
    assert merged.main_class == "com.example.Tool"
    assert merged.arguments == []
    assert merged.main_jar == "app.jar"
    assert merged.java_options == ["-Xmx256m"]
    assert merged.version == "2.1"


def test_merge_leaves_base_untouched(params: ImageParams):
    before = params.model_dump()

    merged = merge_launcher(
        params,
        LauncherOverride(name="App2", java_options=["-Xss1m"], version="9"),
    )
    merged.java_options.append("-Dchanged=true")

    assert params.model_dump() == before
    assert params.name == "App"
    assert params.java_options == ["-Xmx256m"]


def test_load_params(tmp_path: Path, app_input: Path):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({
        "name": "App",
        "main_jar": "app.jar",
        "icon": "icon.png",
        "app_resources": [{"base_dir": str(app_input), "included_files": ["a.txt"]}],
        "add_launchers": [{"name": "App2", "main_class": "com.example.Other"}],
    }))

    params = load_params(path)

    assert params.app_name == "App"
    assert params.icon == Path("icon.png")
    assert params.app_resources[0].included_files == ["a.txt"]
    assert params.add_launchers[0].name == "App2"


def test_load_params_reports_invalid_file(tmp_path: Path):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"main_jar": "app.jar"}))

    with pytest.raises(ConfigError):
        load_params(path)


def test_load_params_reports_missing_file(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_params(tmp_path / "missing.json")


@pytest.mark.parametrize("name", [".", ".."])
def test_dot_names_rejected(name):
    with pytest.raises(ConfigError):
        LauncherParams(name=name, main_class="Main")
    with pytest.raises(ConfigError):
        LauncherOverride(name=name)


def test_merge_jar_launcher_onto_module_primary():
    primary = ImageParams(name="App", main_module="com.example.app/com.example.Main")

    merged = merge_launcher(
        primary,
        LauncherOverride(name="Tool", main_jar="tool.jar", main_class="com.example.Tool"),
    )

    assert merged.main_module is None
    assert merged.main_jar == "tool.jar"
    assert merged.main_class == "com.example.Tool"
    assert primary.main_module == "com.example.app/com.example.Main"


def test_merge_module_launcher_onto_jar_primary(params: ImageParams):
    merged = merge_launcher(
        params,
        LauncherOverride(name="Tool", main_module="com.example.tool"),
    )

    assert merged.main_module == "com.example.tool"
    assert merged.main_jar is None
    assert merged.main_class is None


def test_merge_jar_alone_drops_primary_class(params: ImageParams):
    merged = merge_launcher(params, LauncherOverride(name="Tool", main_jar="tool.jar"))

    assert merged.main_jar == "tool.jar"
    assert merged.main_class is None
    assert merged.main_module is None
