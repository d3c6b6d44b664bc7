from pathlib import Path

import pytest

from appimager.config import ImageParams, RelativeFileSet


@pytest.fixture
def app_input(tmp_path: Path) -> Path:
    base = tmp_path / "input"
    (base / "sub").mkdir(parents=True)
    (base / "a.txt").write_bytes(b"alpha\n")
    (base / "sub" / "b.txt").write_bytes(b"\x00\x01beta\r\n")
    (base / "app.jar").write_bytes(b"PK\x03\x04jar")
    return base


@pytest.fixture
def params(app_input: Path) -> ImageParams:
    return ImageParams(
        name="App",
        version="2.1",
        main_jar="app.jar",
        main_class="com.example.Main",
        java_options=["-Xmx256m"],
        arguments=["--mode", "gui"],
        app_resources=[
            RelativeFileSet(
                base_dir=app_input,
                included_files=["a.txt", "sub/b.txt", "app.jar"],
            )
        ],
    )


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    return tmp_path / "out"
