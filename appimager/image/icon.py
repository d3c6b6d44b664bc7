import logging
from pathlib import Path
from typing import Optional

from appimager.config import ImageParams
from appimager.errors import FilesystemError, InvalidIconError
from appimager.image.layout import AppImageLayout
from appimager.image.resources import ResourceProvider
from appimager.utils.fs import install_file

logger = logging.getLogger(__name__)

ICON_SUFFIX = ".png"


def resolve_icon(icon: Optional[Path]) -> Optional[Path]:
    if icon is not None and icon.suffix.lower() != ICON_SUFFIX:
        raise InvalidIconError(
            f"The icon file {icon} is not in PNG format and will not be used"
        )
    return icon


def copy_icon(
    params: ImageParams,
    *,
    layout: AppImageLayout,
    resources: ResourceProvider,
) -> Optional[Path]:
    """Place the application icon in the desktop integration directory.

    Raises InvalidIconError without writing anything when the supplied icon is
    not a PNG; the caller decides how to report it.
    """

    source = resolve_icon(params.icon)

    if source is None:
        default = layout.platform.default_icon
        suffix = Path(default).suffix.lower()
        data = resources.read_bytes(default, public_name=f"{params.app_name}{suffix}")
    else:
        suffix = source.suffix.lower()
        try:
            data = source.read_bytes()
        except OSError as exc:
            raise FilesystemError(f"Failed to read icon: {source}") from exc

    target = layout.desktop_integration_dir / f"{params.app_name}{suffix}"
    logger.info("Copying icon to %s", target)
    install_file(target, data)
    return target
