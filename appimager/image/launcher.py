import logging
import stat
from pathlib import Path

from appimager.config import LauncherParams
from appimager.image.cfg import LauncherConfigWriter
from appimager.image.layout import AppImageLayout, launcher_cfg_path
from appimager.image.resources import ResourceProvider
from appimager.utils.fs import install_file

logger = logging.getLogger(__name__)

# rwxr-xr-x: executable by everyone, writable by the owner only
LAUNCHER_MODE = (
    stat.S_IRWXU
    | stat.S_IRGRP | stat.S_IXGRP
    | stat.S_IROTH | stat.S_IXOTH
)


def create_launcher(
    params: LauncherParams,
    *,
    layout: AppImageLayout,
    resources: ResourceProvider,
    cfg_writer: LauncherConfigWriter,
) -> tuple[Path, Path]:

    executable = layout.launcher_path(params.name)
    template = resources.read_bytes(layout.platform.launcher_resource)

    logger.info("Creating launcher %s", executable)
    install_file(executable, template, mode=LAUNCHER_MODE)

    cfg_path = launcher_cfg_path(layout, params.name)
    logger.debug("Writing launcher configuration %s", cfg_path)
    cfg_writer.write(params, cfg_path)

    return executable, cfg_path
