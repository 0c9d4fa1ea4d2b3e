"""
Per-file pipeline:

    date -> canonical target -> duplicate check -> (skip | overwrite | rename)
         -> buffered copy -> record

Each step either succeeds or ends the file with a FAILED record. Nothing is
retried, and every file yields exactly one ProcessRecord.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Set

from config import DuplicateStrategy, OrganizerConfig
from copier import (
    DirectoryCache,
    build_destination_path,
    copy_file,
    unique_destination_path,
)
from duplicates import DuplicateDetector
from errors import CopyError, DateExtractionError, DuplicateCheckError
from exif_reader import DateExtractor
from messages import Messages
from models import MediaFile, Outcome, ProcessRecord

logger = logging.getLogger(__name__)


class Processor:
    """
    Holds what a run shares across files: the config, one date extractor,
    one duplicate detector and the directory cache. A new Processor means a
    new, empty cache.
    """

    def __init__(
        self,
        config: OrganizerConfig,
        messages: Optional[Messages] = None,
        date_extractor: Optional[DateExtractor] = None,
        detector: Optional[DuplicateDetector] = None,
    ) -> None:
        self.config = config
        self.messages = messages or Messages(config.language)
        self.date_extractor = date_extractor or DateExtractor()
        self.detector = detector or DuplicateDetector(config.duplicate_detection)
        self.dir_cache = DirectoryCache()

    def canonical_target(self, media_file: MediaFile) -> Path:
        return build_destination_path(
            self.config.target_dir, media_file.capture_date, media_file.name
        )

    def pre_create_directories(self, files: Iterable[MediaFile]) -> int:
        """
        Create every distinct target directory of the batch once, up front.
        Files whose date can not be read are left for process() to report.
        Returns the number of directories created and cached.
        """
        dirs: Set[Path] = set()
        for media_file in files:
            try:
                self.date_extractor.extract(media_file)
            except DateExtractionError as e:
                logger.debug(f"Pre-pass skipped {media_file.path}: {e}")
                continue
            dirs.add(self.canonical_target(media_file).parent)

        created = 0
        for directory in sorted(dirs):
            try:
                self.dir_cache.ensure(directory)
            except OSError as e:
                # copy_file creates it lazily and reports the failure per file
                logger.warning(f"Cannot create {directory}: {e}")
                continue
            created += 1

        logger.debug(f"Pre-created {created} target directories")
        return created

    def process(self, media_file: MediaFile) -> ProcessRecord:
        t = self.messages.t

        try:
            self.date_extractor.extract(media_file)
        except DateExtractionError as e:
            return self._failed(media_file, t("error.extract_date", error=e))

        media_file.target_path = self.canonical_target(media_file)

        try:
            duplicate = self.detector.is_duplicate(media_file)
        except DuplicateCheckError as e:
            return self._failed(media_file, t("error.check_duplicate", error=e))

        if duplicate:
            strategy = self.config.duplicate_strategy
            if strategy is DuplicateStrategy.SKIP:
                logger.debug(f"SKIP  {media_file.path} (duplicate)")
                return ProcessRecord(
                    media_file, Outcome.SKIPPED, t("message.duplicate_skipped")
                )
            elif strategy is DuplicateStrategy.OVERWRITE:
                pass
            elif strategy is DuplicateStrategy.RENAME:
                media_file.target_path = unique_destination_path(media_file.target_path)
            else:
                raise ValueError(f"Unknown duplicate strategy: {strategy!r}")

        try:
            copy_file(media_file.path, media_file.target_path, self.dir_cache)
        except CopyError as e:
            return self._failed(media_file, t("error.copy_file", error=e))

        logger.debug(f"COPY  {media_file.path}  ->  {media_file.target_path}")
        return ProcessRecord(media_file, Outcome.SUCCESS, t("message.success"))

    def _failed(self, media_file: MediaFile, message: str) -> ProcessRecord:
        logger.warning(f"{media_file.path}: {message}")
        return ProcessRecord(media_file, Outcome.FAILED, message)
