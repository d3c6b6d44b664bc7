from pathlib import Path
from typing import List

from appimager.config import LauncherParams
from appimager.image.layout import (
    LINUX_APP_IMAGE,
    PlatformLayout,
    cfg_app_dir,
    cfg_app_modules_dir,
    cfg_runtime_dir,
)
from appimager.utils.fs import install_file

CLASSPATH_SEPARATOR = ":"


class LauncherConfigWriter:
    """Writes the ``<name>.cfg`` file a launcher reads at startup.

    Paths are written relative to the ``$ROOTDIR`` token so the image can be
    installed under any prefix.
    """

    def __init__(self, platform: PlatformLayout = LINUX_APP_IMAGE) -> None:
        self.platform = platform

    def write(self, params: LauncherParams, destination: Path) -> Path:
        install_file(destination, self.render(params).encode("utf-8"))
        return destination

    def render(self, params: LauncherParams) -> str:
        app_dir = cfg_app_dir(self.platform)

        lines: List[str] = [
            "[Application]",
            f"app.name={params.name}",
            f"app.version={params.version}",
            f"app.appdir={app_dir}",
            f"app.runtime={cfg_runtime_dir(self.platform)}",
            f"app.identifier={params.effective_identifier}",
            f"app.classpath={self._classpath(params.classpath)}",
        ]

        if params.main_jar:
            lines.append(f"app.mainjar={app_dir}{params.main_jar}")

        if params.main_module:
            lines.append(f"app.mainmodule={params.main_module}")
        elif params.main_class:
            lines.append(f"app.mainclass={params.main_class}")

        lines += ["", "[JavaOptions]"]
        lines += [f"java-options={option}" for option in params.java_options]

        if params.main_module:
            lines.append("java-options=--module-path")
            lines.append(f"java-options={cfg_app_modules_dir(self.platform)}")

        lines += ["", "[ArgOptions]"]
        lines += [f"arguments={argument}" for argument in params.arguments]

        return "\n".join(lines) + "\n"

    def _classpath(self, entries: List[str]) -> str:
        app_dir = cfg_app_dir(self.platform)
        return CLASSPATH_SEPARATOR.join(f"{app_dir}{entry}" for entry in entries)
