import logging
import os
from pathlib import Path
from typing import List, Optional

from errors import ScanError
from models import MediaFile, MediaKind

logger = logging.getLogger(__name__)


PHOTO_EXTENSIONS = frozenset({
    ".arw", ".jpg", ".jpeg", ".png", ".heic", ".gif", ".bmp", ".raw",
})

VIDEO_EXTENSIONS = frozenset({
    ".mp4", ".mov", ".avi", ".mkv", ".flv", ".wmv",
})


def classify_file(file_path: Path) -> Optional[MediaKind]:
    """Return PHOTO, VIDEO, or None based on file extension."""
    ext = file_path.suffix.lower()
    if ext in PHOTO_EXTENSIONS:
        return MediaKind.PHOTO
    if ext in VIDEO_EXTENSIONS:
        return MediaKind.VIDEO
    return None


def _raise_walk_error(err: OSError) -> None:
    raise err


def scan_directory(source_path: Path) -> List[MediaFile]:
    """
    Walk source_path recursively and return every photo or video found,
    in lexical path order: entries of a directory are sorted by name, and a
    subdirectory's files come where its name sorts among its siblings.

    The whole tree is read before anything is returned. Files with an
    unsupported extension are left out silently. Any error while walking
    (unreadable directory, broken symlink, missing root) raises ScanError
    and nothing is returned.
    """
    if not source_path.is_dir():
        raise ScanError(f"Source directory does not exist: {source_path}")

    files: List[MediaFile] = []
    try:
        for root, dirs, names in os.walk(source_path, onerror=_raise_walk_error):
            root_path = Path(root)
            for name in names:
                file_path = root_path / name
                kind = classify_file(file_path)
                if kind is None:
                    continue
                size = file_path.stat().st_size
                files.append(MediaFile.from_path(file_path, kind, size))
    except OSError as e:
        raise ScanError(f"Cannot scan {source_path}: {e}") from e

    files.sort(key=lambda f: f.path.relative_to(source_path).parts)
    logger.debug(f"Scanned {source_path}: {len(files)} media files")
    return files

