"""Decide whether a file's canonical target already holds the same file."""

import logging

from config import DuplicateDetection
from errors import DuplicateCheckError
from hasher import compute_md5
from models import MediaFile

logger = logging.getLogger(__name__)


class DuplicateDetector:
    """
    FILENAME: an existing file at the target path is a duplicate, whatever
    its content (a stat, no reads).
    MD5: the target must also have the same content hash as the source.
    The source hash is cached on the MediaFile.
    """

    def __init__(self, detection: DuplicateDetection) -> None:
        self.detection = detection

    def is_duplicate(self, media_file: MediaFile) -> bool:
        target = media_file.target_path
        if target is None or not target.exists():
            return False

        if self.detection is DuplicateDetection.FILENAME:
            return True
        if self.detection is DuplicateDetection.MD5:
            return self._same_content(media_file)
        raise ValueError(f"Unknown duplicate detection: {self.detection!r}")

    def _same_content(self, media_file: MediaFile) -> bool:
        try:
            if media_file.content_hash is None:
                media_file.content_hash = compute_md5(media_file.path)
            target_hash = compute_md5(media_file.target_path)
        except OSError as e:
            raise DuplicateCheckError(str(e)) from e

        same = media_file.content_hash == target_hash
        logger.debug(
            f"md5 {media_file.path} vs {media_file.target_path}: "
            f"{'same' if same else 'different'}"
        )
        return same
