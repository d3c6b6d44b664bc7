import io
import logging
from importlib import resources
from pathlib import Path
from typing import BinaryIO, Optional

from appimager.errors import ResourceNotFoundError

logger = logging.getLogger(__name__)

PACKAGED_RESOURCES = "appimager.data"


class ResourceProvider:
    """Supplies launcher templates, the support library and icons.

    Files placed in ``resource_dir`` take precedence over the resources
    packaged with appimager. A resource may also be looked up under a
    ``public_name`` (e.g. ``<AppName>.png``) so users can override it per
    application.
    """

    def __init__(self, resource_dir: Optional[Path] = None) -> None:
        self.resource_dir = resource_dir

    def open(self, name: str, *, public_name: Optional[str] = None) -> BinaryIO:
        return io.BytesIO(self.read_bytes(name, public_name=public_name))

    def read_bytes(self, name: str, *, public_name: Optional[str] = None) -> bytes:
        custom = self._find_custom(name, public_name)
        if custom is not None:
            logger.info("Using custom package resource %s", custom)
            try:
                return custom.read_bytes()
            except OSError as exc:
                raise ResourceNotFoundError(
                    f"Failed to read resource: {custom}"
                ) from exc

        packaged = resources.files(PACKAGED_RESOURCES).joinpath(name)
        if not packaged.is_file():
            raise ResourceNotFoundError(f"Resource not found: {name}")

        logger.info("Using default package resource %s", name)
        try:
            return packaged.read_bytes()
        except OSError as exc:
            raise ResourceNotFoundError(
                f"Failed to read resource: {name}"
            ) from exc

    def _find_custom(self, name: str, public_name: Optional[str]) -> Optional[Path]:
        if self.resource_dir is None:
            return None

        for candidate in (public_name, name):
            if not candidate:
                continue
            path = self.resource_dir / candidate
            if path.is_file():
                return path

        return None
