import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from appimager.config import (
    ImageParams,
    LauncherOverride,
    LauncherParams,
    RelativeFileSet,
    merge_launcher,
)
from appimager.errors import InvalidIconError, MissingResourceSetError
from appimager.image.cfg import LauncherConfigWriter
from appimager.image.icon import copy_icon
from appimager.image.launcher import create_launcher
from appimager.image.layout import AppImageLayout
from appimager.image.resources import ResourceProvider
from appimager.utils.fs import copy_entry, install_file, writable_output_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppImage:
    layout: AppImageLayout
    launchers: List[Path]
    cfg_files: List[Path]
    native_library: Path
    copied_files: List[Path]
    icon: Optional[Path]
    warnings: List[str] = field(default_factory=list)


def prepare_application_files(
    params: ImageParams,
    *,
    output_root: Path,
    add_launchers: Optional[Sequence[LauncherOverride]] = None,
    resources: Optional[ResourceProvider] = None,
    cfg_writer: Optional[LauncherConfigWriter] = None,
) -> AppImage:
    """Populate the app image for ``params`` under ``output_root/<app name>``.

    Steps run in order and the first failure aborts the rest. Files written
    before the failure stay on disk.
    """

    layout = AppImageLayout.resolve(output_root, params.app_name)
    resources = resources or ResourceProvider()
    cfg_writer = cfg_writer or LauncherConfigWriter(layout.platform)
    if add_launchers is None:
        add_launchers = params.add_launchers

    # Secondary launchers are layered onto this snapshot, never onto params.
    primary = LauncherParams.model_validate(
        params.model_dump(include=set(LauncherParams.model_fields))
    )

    for directory in layout.roots():
        writable_output_dir(directory)

    launchers: List[Path] = []
    cfg_files: List[Path] = []

    def _launcher(launcher_params: LauncherParams) -> None:
        executable, cfg_path = create_launcher(
            launcher_params,
            layout=layout,
            resources=resources,
            cfg_writer=cfg_writer,
        )
        launchers.append(executable)
        cfg_files.append(cfg_path)

    _launcher(primary)

    library = layout.native_library
    logger.info("Copying launcher library to %s", library)
    install_file(library, resources.read_bytes(layout.platform.library_resource))

    for override in add_launchers:
        _launcher(merge_launcher(primary, override))

    copied = copy_application(params.app_resources, layout)

    warnings: List[str] = []
    try:
        icon = copy_icon(params, layout=layout, resources=resources)
    except InvalidIconError as exc:
        logger.error("%s", exc)
        warnings.append(str(exc))
        icon = None

    return AppImage(
        layout=layout,
        launchers=launchers,
        cfg_files=cfg_files,
        native_library=library,
        copied_files=copied,
        icon=icon,
        warnings=warnings,
    )


def copy_application(
    resource_sets: Iterable[Optional[RelativeFileSet]],
    layout: AppImageLayout,
) -> List[Path]:
    copied: List[Path] = []

    for resource_set in resource_sets:
        if resource_set is None:
            raise MissingResourceSetError(
                "Application resource set is missing"
            )

        logger.info(
            "Copying %d application files from %s",
            len(resource_set.included_files),
            resource_set.base_dir,
        )
        for relative in resource_set.included_files:
            target = copy_entry(layout.app_dir, resource_set.base_dir, relative)
            logger.debug("Copied %s", target)
            copied.append(target)

    return copied
