from pathlib import Path, PurePosixPath
from dataclasses import dataclass

ROOTDIR_TOKEN = "$ROOTDIR"


@dataclass(frozen=True)
class PlatformLayout:
    """Relative directory policy of one target platform family."""

    name: str
    launchers: PurePosixPath
    app: PurePosixPath
    runtime: PurePosixPath
    native_library: PurePosixPath
    desktop_integration: PurePosixPath
    app_modules: PurePosixPath
    launcher_resource: str
    library_resource: str
    default_icon: str


LINUX_APP_IMAGE = PlatformLayout(
    name="linux",
    launchers=PurePosixPath("bin"),
    app=PurePosixPath("lib/app"),
    runtime=PurePosixPath("lib/runtime"),
    native_library=PurePosixPath("lib"),
    desktop_integration=PurePosixPath("lib"),
    app_modules=PurePosixPath("lib/app/mods"),
    launcher_resource="applauncher",
    library_resource="libapplauncher.sh",
    default_icon="default32.png",
)


@dataclass(frozen=True)
class AppImageLayout:
    root: Path
    platform: PlatformLayout = LINUX_APP_IMAGE

    @classmethod
    def resolve(
        cls,
        output_root: Path,
        app_name: str,
        platform: PlatformLayout = LINUX_APP_IMAGE,
    ) -> "AppImageLayout":
        return cls(Path(output_root) / app_name, platform)

    @property
    def launchers_dir(self) -> Path:
        return self.root / self.platform.launchers

    @property
    def app_dir(self) -> Path:
        return self.root / self.platform.app

    @property
    def runtime_dir(self) -> Path:
        return self.root / self.platform.runtime

    @property
    def native_library_dir(self) -> Path:
        return self.root / self.platform.native_library

    @property
    def desktop_integration_dir(self) -> Path:
        return self.root / self.platform.desktop_integration

    @property
    def app_modules_dir(self) -> Path:
        return self.root / self.platform.app_modules

    @property
    def native_library(self) -> Path:
        return self.native_library_dir / self.platform.library_resource

    def launcher_path(self, name: str) -> Path:
        return self.launchers_dir / name

    def roots(self) -> list[Path]:
        dirs = [
            self.launchers_dir,
            self.app_dir,
            self.runtime_dir,
            self.native_library_dir,
            self.desktop_integration_dir,
            self.app_modules_dir,
        ]

        unique: list[Path] = []
        seen: set[Path] = set()
        for directory in dirs:
            if directory in seen:
                continue
            seen.add(directory)
            unique.append(directory)
        return unique


def launcher_cfg_path(layout: AppImageLayout, name: str) -> Path:
    return layout.app_dir / f"{name}.cfg"


def cfg_app_dir(platform: PlatformLayout = LINUX_APP_IMAGE) -> str:
    # Trailing separator lets the launcher append file names directly.
    return f"{_symbolic(platform.app)}/"


def cfg_runtime_dir(platform: PlatformLayout = LINUX_APP_IMAGE) -> str:
    return _symbolic(platform.runtime)


def cfg_app_modules_dir(platform: PlatformLayout = LINUX_APP_IMAGE) -> str:
    return _symbolic(platform.app_modules)


def _symbolic(relative: PurePosixPath) -> str:
    return str(PurePosixPath(ROOTDIR_TOKEN) / relative)
