"""
Drives one organize run: scan, pre-create directories, then one file at a
time until done or cancelled.

The session is synchronous and keeps no threads of its own. A batch loop
calls run(); an event loop calls start(), then process_next(i) for each
index while has_next(i) holds, then finish(). cancel() may be called from a
signal handler or a UI callback; it is only looked at between files.
"""

import logging
from typing import Callable, List, Optional

from config import OrganizerConfig
from messages import Messages
from models import MediaFile, Outcome, ProcessRecord, RunStatistics
from processor import Processor
from run_log import RunLog
from scanner import scan_directory

logger = logging.getLogger(__name__)


class OrganizeSession:
    def __init__(
        self,
        config: OrganizerConfig,
        messages: Optional[Messages] = None,
        run_log: Optional[RunLog] = None,
    ) -> None:
        self.config = config
        self.messages = messages or Messages(config.language)
        self.run_log = run_log
        self.processor = Processor(config, self.messages)
        self.stats = RunStatistics()
        self.files: List[MediaFile] = []
        self.records: List[ProcessRecord] = []
        self._cancelled = False
        self._finished = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Ask the run to stop; the file in flight still completes."""
        self._cancelled = True

    def start(self) -> List[MediaFile]:
        """Scan the source tree. ScanError propagates before any file is touched."""
        self.stats.start()
        self.files = scan_directory(self.config.source_dir)
        self.stats.total_files = len(self.files)
        for media_file in self.files:
            self.stats.count_scanned(media_file)

        logger.info(f"Found {len(self.files)} media files in {self.config.source_dir}")
        if self.files:
            self.processor.pre_create_directories(self.files)
        return self.files

    def has_next(self, index: int) -> bool:
        return not self._cancelled and index < len(self.files)

    def process_next(self, index: int) -> ProcessRecord:
        record = self.processor.process(self.files[index])
        self.records.append(record)
        self.stats.record(record)
        if self.run_log is not None:
            self.run_log.record(record)
            if record.outcome is Outcome.FAILED:
                self.run_log.error(f"{record.file.path}: {record.message}")
        return record

    def finish(self) -> RunStatistics:
        if not self._finished:
            self._finished = True
            self.stats.finish()
            if self.run_log is not None:
                self.run_log.statistics(self.stats)
        return self.stats

    def run(
        self,
        on_record: Optional[Callable[[ProcessRecord], None]] = None,
    ) -> RunStatistics:
        self.start()
        index = 0
        while self.has_next(index):
            record = self.process_next(index)
            if on_record is not None:
                on_record(record)
            index += 1
        if self._cancelled:
            logger.info(f"Cancelled after {index} of {len(self.files)} files")
        return self.finish()
