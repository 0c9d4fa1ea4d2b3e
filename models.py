import enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional


class MediaKind(enum.Enum):
    PHOTO = "photo"
    VIDEO = "video"


class Outcome(enum.Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class MediaFile:
    path: Path
    name: str
    kind: MediaKind
    size: int                                  # bytes
    capture_date: Optional[datetime] = None    # EXIF time or mtime
    content_hash: Optional[str] = None         # md5 hex, only when hashing
    target_path: Optional[Path] = None

    @classmethod
    def from_path(cls, path: Path, kind: MediaKind, size: int) -> "MediaFile":
        return cls(path=path, name=path.name, kind=kind, size=size)


@dataclass(frozen=True)
class ProcessRecord:
    file: MediaFile
    outcome: Outcome
    message: str = ""


@dataclass
class RunStatistics:
    """
    Running counters for one organize run.

    The success count is never stored: it is always derived from
    processed - skipped - failed so the two can not drift apart.
    """
    total_files: int = 0
    processed_files: int = 0
    photo_count: int = 0
    video_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: timedelta = field(default_factory=timedelta)

    def start(self) -> None:
        self.start_time = datetime.now()

    def count_scanned(self, media_file: MediaFile) -> None:
        """Classification counters, bumped once per file at scan time."""
        if media_file.kind is MediaKind.PHOTO:
            self.photo_count += 1
        elif media_file.kind is MediaKind.VIDEO:
            self.video_count += 1

    def record(self, record: ProcessRecord) -> None:
        self.processed_files += 1
        if record.outcome is Outcome.SKIPPED:
            self.skipped_count += 1
        elif record.outcome is Outcome.FAILED:
            self.failed_count += 1

    def finish(self) -> None:
        self.end_time = datetime.now()
        if self.start_time is None:
            self.start_time = self.end_time
        self.duration = self.end_time - self.start_time

    @property
    def success_count(self) -> int:
        return self.processed_files - self.skipped_count - self.failed_count

    @property
    def speed(self) -> float:
        """Files per second; 0 when no time has elapsed."""
        seconds = self.duration.total_seconds()
        if seconds == 0:
            return 0.0
        return self.processed_files / seconds
