import itertools
import logging
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import Set

from errors import CopyError

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 64 * 1024


def build_destination_path(
    target_root: Path,
    capture_date: datetime,
    original_filename: str,
) -> Path:
    """
    Construct: target_root / YYYY / MM / MM-DD / filename
    Example: /backup/2024/03/03-15/IMG_0042.jpg
    """
    return (
        target_root
        / capture_date.strftime("%Y")
        / capture_date.strftime("%m")
        / capture_date.strftime("%m-%d")
        / original_filename
    )


def unique_destination_path(dest_path: Path) -> Path:
    """
    Return dest_path if free, else the first free name(1).ext, name(2).ext, ...

    There is no upper bound on the probe; it stops at the first name that
    does not exist.
    """
    if not dest_path.exists():
        return dest_path

    stem = dest_path.stem
    suffix = dest_path.suffix
    parent = dest_path.parent

    for counter in itertools.count(1):
        candidate = parent / f"{stem}({counter}){suffix}"
        if not candidate.exists():
            return candidate


class DirectoryCache:
    """Target directories known to exist during the current run. Never shrinks."""

    def __init__(self) -> None:
        self._dirs: Set[Path] = set()

    def __contains__(self, directory: Path) -> bool:
        return directory in self._dirs

    def __len__(self) -> int:
        return len(self._dirs)

    def add(self, directory: Path) -> None:
        self._dirs.add(directory)

    def ensure(self, directory: Path) -> None:
        """Create directory (and parents) unless already cached, then cache it."""
        if directory in self._dirs:
            return
        directory.mkdir(parents=True, exist_ok=True)
        self._dirs.add(directory)


def copy_file(source_path: Path, dest_path: Path, cache: DirectoryCache) -> Path:
    """
    Byte copy source to dest through a fixed-size buffer, creating the
    parent directory through the cache. dest is created or truncated.

    When dest already is the source file (same inode) nothing is written.
    On failure the partially written destination is removed and CopyError
    is raised.
    """
    try:
        cache.ensure(dest_path.parent)
    except OSError as e:
        raise CopyError(f"Cannot create {dest_path.parent}: {e}") from e

    try:
        if dest_path.exists() and os.path.samefile(source_path, dest_path):
            # Opening dest for writing would truncate the source itself.
            logger.debug(f"{source_path} is already at {dest_path}, not copied")
            return dest_path
    except OSError as e:
        raise CopyError(f"Cannot compare {source_path} with {dest_path}: {e}") from e

    dest_created = False
    try:
        with open(source_path, "rb") as fsrc:
            with open(dest_path, "wb", buffering=COPY_BUFFER_SIZE) as fdst:
                dest_created = True
                shutil.copyfileobj(fsrc, fdst, COPY_BUFFER_SIZE)
                fdst.flush()
    except OSError as e:
        if dest_created:
            _remove_partial(dest_path)
        raise CopyError(f"Cannot copy {source_path} -> {dest_path}: {e}") from e

    return dest_path


def _remove_partial(dest_path: Path) -> None:
    try:
        dest_path.unlink()
    except OSError as e:
        logger.warning(f"Could not remove partial file {dest_path}: {e}")
