from pathlib import Path, PurePosixPath
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
import pydantic

from appimager.errors import ConfigError


class RelativeFileSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_dir: Path = Field(
        ...,
        description="Directory the included files are relative to",
    )
    included_files: List[str] = Field(
        default_factory=list,
        description="Relative file paths to copy, in order",
    )

    @field_validator("included_files")
    @classmethod
    def validate_included_files(cls, value: List[str]) -> List[str]:
        seen = set()
        files: List[str] = []

        for name in value:
            relative = PurePosixPath(name)
            if not name or relative.is_absolute():
                raise ConfigError(f"Included file must be a relative path: '{name}'")
            if ".." in relative.parts:
                raise ConfigError(f"Included file escapes its base directory: '{name}'")

            normalized = relative.as_posix()
            if normalized not in seen:
                seen.add(normalized)
                files.append(normalized)

        return files

    @classmethod
    def scan(cls, base_dir: Path) -> "RelativeFileSet":
        if not base_dir.is_dir():
            raise ConfigError(f"Input directory does not exist: {base_dir}")

        files = sorted(
            path.relative_to(base_dir).as_posix()
            for path in base_dir.rglob("*")
            if path.is_file()
        )
        return cls(base_dir=base_dir, included_files=files)


def _check_name(value: str) -> str:
    if not value:
        raise ConfigError("Launcher name cannot be empty")
    if "/" in value or "\\" in value:
        raise ConfigError("Launcher name must not contain path separators")
    if value in (".", ".."):
        raise ConfigError(f"Launcher name is not allowed: '{value}'")
    return value


class LauncherParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        description="Launcher name; the primary launcher is named after the app",
    )
    version: str = Field(
        default="1.0",
        description="Application version written to the launcher configuration",
    )
    identifier: Optional[str] = Field(
        default=None,
        description="Application identifier, defaults to the launcher name",
    )
    main_jar: Optional[str] = Field(
        default=None,
        description="Main jar, relative to the app directory",
    )
    main_class: Optional[str] = Field(
        default=None,
        description="Fully qualified main class",
    )
    main_module: Optional[str] = Field(
        default=None,
        description="Main module in the form module[/class]",
    )
    classpath: List[str] = Field(
        default_factory=list,
        description="Class path entries, relative to the app directory",
    )
    java_options: List[str] = Field(
        default_factory=list,
        description="Options passed to the runtime",
    )
    arguments: List[str] = Field(
        default_factory=list,
        description="Default arguments passed to the application",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _check_name(value)

    @field_validator("main_jar")
    @classmethod
    def validate_main_jar(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and PurePosixPath(value).is_absolute():
            raise ConfigError(f"Main jar must be relative to the app directory: {value}")
        return value

    @model_validator(mode="after")
    def validate_entry_point(self):
        if not (self.main_jar or self.main_module or self.main_class):
            raise ConfigError(
                f"Launcher '{self.name}' needs a main jar, main module or main class"
            )
        return self

    @property
    def effective_identifier(self) -> str:
        return self.identifier or self.name


class LauncherOverride(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Name of the secondary launcher")
    version: Optional[str] = None
    identifier: Optional[str] = None
    main_jar: Optional[str] = None
    main_class: Optional[str] = None
    main_module: Optional[str] = None
    classpath: Optional[List[str]] = None
    java_options: Optional[List[str]] = None
    arguments: Optional[List[str]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _check_name(value)


class ImageParams(LauncherParams):
    icon: Optional[Path] = Field(
        default=None,
        description="PNG icon; the packaged default icon is used when unset",
    )
    app_resources: List[Optional[RelativeFileSet]] = Field(
        default_factory=list,
        description="File sets copied into the app directory",
    )
    add_launchers: List[LauncherOverride] = Field(
        default_factory=list,
        description="Secondary launchers layered onto these parameters",
    )

    @model_validator(mode="after")
    def validate_unique_launchers(self):
        seen = {self.name}
        for launcher in self.add_launchers:
            if launcher.name in seen:
                raise ConfigError(f"Duplicate launcher name: '{launcher.name}'")
            seen.add(launcher.name)
        return self

    @property
    def app_name(self) -> str:
        return self.name


def merge_launcher(base: LauncherParams, override: LauncherOverride) -> LauncherParams:
    """Layer a secondary launcher onto a snapshot of the primary parameters.

    An entry point named by the override replaces the primary's: a main
    module drops the main jar and class, a main jar drops the module and
    class, and a main class alone drops the module.
    """

    values = base.model_dump(include=set(LauncherParams.model_fields))
    updates = override.model_dump(exclude_unset=True, exclude_none=True)

    if "main_module" in updates:
        cleared = ("main_jar", "main_class")
    elif "main_jar" in updates:
        cleared = ("main_module", "main_class")
    elif "main_class" in updates:
        cleared = ("main_module",)
    else:
        cleared = ()

    for key in cleared:
        values[key] = None

    values.update(updates)
    return LauncherParams.model_validate(values)


def load_params(path: Path) -> ImageParams:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read parameter file: {path}") from exc

    try:
        return ImageParams.model_validate_json(content)
    except pydantic.ValidationError as exc:
        raise ConfigError(f"Invalid parameter file {path}:\n{exc}") from exc
