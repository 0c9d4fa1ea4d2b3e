import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import exifread

from errors import DateExtractionError
from models import MediaFile, MediaKind

logger = logging.getLogger(__name__)

# EXIF tags checked in priority order
EXIF_DATE_TAGS = [
    "EXIF DateTimeOriginal",
    "EXIF DateTimeDigitized",
    "Image DateTime",
]

EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"


def _parse_exif_date(raw_value: str) -> Optional[datetime]:
    """Parse an EXIF date string, returning None if invalid or zeroed."""
    try:
        dt = datetime.strptime(raw_value.strip(), EXIF_DATE_FORMAT)
        # Guard against cameras writing zeroed dates
        if dt.year < 1970 or dt.month == 0 or dt.day == 0:
            return None
        return dt
    except (ValueError, AttributeError):
        return None


def get_date_from_exif(file_path: Path) -> Optional[datetime]:
    """
    Read the embedded capture time of a photo.
    Returns None when the file has no usable EXIF date or cannot be decoded.
    """
    try:
        with open(file_path, "rb") as f:
            tags = exifread.process_file(f, details=False)
    except Exception as e:
        logger.debug(f"No EXIF for {file_path}: {e}")
        return None

    for tag_name in EXIF_DATE_TAGS:
        if tag_name in tags:
            dt = _parse_exif_date(str(tags[tag_name]))
            if dt is not None:
                return dt
    return None


def get_date_from_fs(file_path: Path) -> datetime:
    """Last-modification time of the file; raises DateExtractionError if unstatable."""
    try:
        stat = file_path.stat()
    except OSError as e:
        raise DateExtractionError(f"Cannot stat {file_path}: {e}") from e
    return datetime.fromtimestamp(stat.st_mtime)


def get_media_date(media_file: MediaFile) -> Tuple[datetime, str]:
    """
    Photos: EXIF capture time, falling back to mtime.
    Videos: always mtime.
    Returns (datetime, source_label) with label 'exif' or 'mtime'.
    """
    if media_file.kind is MediaKind.PHOTO:
        dt = get_date_from_exif(media_file.path)
        if dt is not None:
            return dt, "exif"
    return get_date_from_fs(media_file.path), "mtime"


class DateExtractor:
    """Sets capture_date on a MediaFile. One instance is shared by a run."""

    def extract(self, media_file: MediaFile) -> datetime:
        dt, source = get_media_date(media_file)
        logger.debug(f"{media_file.path}: {dt:%Y-%m-%d %H:%M:%S} ({source})")
        media_file.capture_date = dt
        return dt
