"""Plain-text log of one organize run: header, one line per file, summary."""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from messages import Messages
from models import ProcessRecord, RunStatistics

RULE = "=" * 60


def format_duration(duration: timedelta) -> str:
    """timedelta rounded to whole seconds, e.g. '0:01:05'."""
    return str(timedelta(seconds=round(duration.total_seconds())))


def _format_time(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else "-"


class RunLog:
    """
    Writes organize_log_YYYYMMDD_HHMMSS.txt in log_dir.

    Created at run start and closed at run end; usable as a context manager.
    """

    def __init__(self, log_dir: Path, messages: Optional[Messages] = None) -> None:
        self.messages = messages or Messages()
        now = datetime.now()
        log_dir.mkdir(parents=True, exist_ok=True)
        self.path = (log_dir / f"organize_log_{now:%Y%m%d_%H%M%S}.txt").resolve()

        self._handler = logging.FileHandler(self.path, mode="w", encoding="utf-8")
        self._handler.setFormatter(logging.Formatter("%(message)s"))
        self._logger = logging.getLogger(f"run_log.{id(self)}")
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False
        self._logger.addHandler(self._handler)

        self._write(self.messages.t("log.title", timestamp=f"{now:%Y-%m-%d %H:%M:%S}"))
        self._write(RULE)
        self._write("")

    def _write(self, line: str) -> None:
        self._logger.info(line)

    def record(self, record: ProcessRecord) -> None:
        status = self.messages.t(f"status.{record.outcome.value}")
        target = record.file.target_path or "-"
        self._write(
            f"[{datetime.now():%H:%M:%S}] {status} | {record.file.name} -> "
            f"{target} | {record.message}"
        )

    def error(self, message: str) -> None:
        self._write(f"[{datetime.now():%H:%M:%S}] ERROR | {message}")

    def statistics(self, stats: RunStatistics) -> None:
        t = self.messages.t
        self._write("")
        self._write(RULE)
        self._write(t("log.summary_title"))
        self._write(RULE)
        self._write(t("summary.total", count=stats.total_files))
        self._write(t("summary.photos", count=stats.photo_count))
        self._write(t("summary.videos", count=stats.video_count))
        self._write(t("summary.success", count=stats.success_count))
        self._write(t("summary.skipped", count=stats.skipped_count))
        self._write(t("summary.failed", count=stats.failed_count))
        self._write(t("log.start_time", value=_format_time(stats.start_time)))
        self._write(t("log.end_time", value=_format_time(stats.end_time)))
        self._write(t("summary.duration", duration=format_duration(stats.duration)))
        self._write(t("summary.speed", speed=stats.speed))

    def close(self) -> None:
        if self._handler is None:
            return
        self._logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None

    def __enter__(self) -> "RunLog":
        return self

    def __exit__(self, *args) -> None:
        self.close()
