import logging
import os
import shutil
from pathlib import Path

from appimager.errors import DirectoryNotWritableError, FilesystemError

logger = logging.getLogger(__name__)


def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(
            f"Failed to create directory: {path}"
        ) from exc


def writable_output_dir(path: Path) -> None:
    """Create ``path`` if needed and check that files can be written into it."""

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryNotWritableError(
            f"Cannot create output directory: {path}"
        ) from exc

    if not path.is_dir():
        raise DirectoryNotWritableError(
            f"Output path is not a directory: {path}"
        )
    if not os.access(path, os.W_OK):
        raise DirectoryNotWritableError(
            f"Output directory is not writable: {path}"
        )


def install_file(path: Path, data: bytes, *, mode: int | None = None) -> bool:
    """Write ``data`` to ``path`` and apply ``mode`` as one step.

    The bytes land in a sibling temporary file which only replaces ``path``
    once the permissions are set. The temporary file is removed on failure.
    Returns False when ``path`` already held the same bytes and no write was
    needed.
    """

    ensure_dir(path.parent)

    if path.is_file() and _same_content(path, data):
        logger.debug("Keeping up-to-date file %s", path)
        if mode is not None:
            _chmod(path, mode)
        return False

    tmp_path = path.with_name(f".{path.name}.tmp")

    try:
        with tmp_path.open("wb") as f:
            f.write(data)
        if mode is not None:
            tmp_path.chmod(mode)
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise FilesystemError(
            f"Failed to write file: {path}"
        ) from exc

    return True


def copy_entry(dest_dir: Path, src_dir: Path, relative: str) -> Path:
    source = src_dir / relative
    target = dest_dir / relative

    ensure_dir(target.parent)
    try:
        shutil.copyfile(source, target)
    except OSError as exc:
        raise FilesystemError(
            f"Failed to copy {source} to {target}"
        ) from exc

    return target


def _same_content(path: Path, data: bytes) -> bool:
    try:
        return path.stat().st_size == len(data) and path.read_bytes() == data
    except OSError:
        return False


def _chmod(path: Path, mode: int) -> None:
    try:
        path.chmod(mode)
    except OSError as exc:
        raise FilesystemError(
            f"Failed to set permissions on {path}"
        ) from exc
