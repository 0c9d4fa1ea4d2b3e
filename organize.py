#!/usr/bin/env python3
"""
media-organizer: copy photos and videos from a source tree into a dated
target structure (YYYY/MM/MM-DD/) and handle files that are already there.

Usage:
    python organize.py --source /Volumes/SD1/DCIM --target ~/Pictures/Library
"""

import argparse
import signal
import sys
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from config import (
    LOG_LEVELS,
    DuplicateDetection,
    DuplicateStrategy,
    OrganizerConfig,
    config_from_dict,
    load_full_config,
)
from errors import ConfigError, ScanError
from logging_setup import setup_logging
from messages import Messages
from models import Outcome, ProcessRecord, RunStatistics
from run_log import RunLog, format_duration
from session import OrganizeSession

__version__ = "2.0.0"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 130


# ── Progress helpers ──────────────────────────────────────────────────────────

class _NoOpBar:
    """Minimal tqdm-compatible no-op for --no-progress mode."""
    def __init__(self, *args, **kwargs):
        pass

    def update(self, n=1):
        pass

    def set_postfix(self, **kwargs):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        pass


def _make_bar(total: int, desc: str, use_progress: bool):
    if use_progress:
        return tqdm(total=total, unit="file", desc=desc, ncols=80)
    return _NoOpBar()


# ── Output ────────────────────────────────────────────────────────────────────

def print_header(config: OrganizerConfig, messages: Messages) -> None:
    t = messages.t
    print(t("run.start"))
    print(t("run.source_dir", path=config.source_dir))
    print(t("run.target_dir", path=config.target_dir))
    print(t("run.detection", value=config.duplicate_detection.value))
    print(t("run.strategy", value=config.duplicate_strategy.value))
    print()


def print_summary(
    stats: RunStatistics,
    config: OrganizerConfig,
    messages: Messages,
    failures: List[ProcessRecord],
) -> None:
    t = messages.t
    print("\n" + "=" * 44)
    print("  " + t("summary.title"))
    print("=" * 44)
    print("  " + t("summary.total", count=stats.total_files))
    print("  " + t("summary.photos", count=stats.photo_count))
    print("  " + t("summary.videos", count=stats.video_count))
    print("  " + t("summary.success", count=stats.success_count))
    print("  " + t("summary.skipped", count=stats.skipped_count))
    print("  " + t("summary.failed", count=stats.failed_count))
    print("  " + t("summary.duration", duration=format_duration(stats.duration)))
    print("  " + t("summary.speed", speed=stats.speed))

    if failures:
        show = failures[:20]
        for record in show:
            print(f"    ! {record.file.path}: {record.message}")
        if len(failures) > 20:
            print(f"    ... and {len(failures) - 20} more errors")
        print("\n" + t("summary.failed_notice"))

    print("\n" + t("summary.strategy", value=config.duplicate_strategy.value))


# ── Core run ──────────────────────────────────────────────────────────────────

def run_organizer(
    config: OrganizerConfig,
    messages: Messages,
    log_dir: Path,
    use_progress: bool,
) -> int:
    """Line-mode run of the whole pipeline. Returns the process exit code."""
    t = messages.t
    print_header(config, messages)

    with RunLog(log_dir, messages) as run_log:
        session = OrganizeSession(config, messages, run_log)

        def _on_interrupt(signum, frame):
            print("\n" + t("run.interrupted"), file=sys.stderr)
            session.cancel()

        previous = signal.signal(signal.SIGINT, _on_interrupt)
        try:
            print(t("run.scanning"))
            try:
                files = session.start()
            except ScanError as e:
                run_log.error(str(e))
                print(t("run.scan_failed", error=e), file=sys.stderr)
                return EXIT_ERROR

            if not files:
                print(t("run.no_media_files"))
                session.finish()
                return EXIT_OK

            print(t("run.files_found", count=len(files)))

            failures: List[ProcessRecord] = []
            with _make_bar(len(files), desc="organize", use_progress=use_progress) as bar:
                index = 0
                while session.has_next(index):
                    record = session.process_next(index)
                    if record.outcome is Outcome.FAILED:
                        failures.append(record)
                    bar.update(1)
                    bar.set_postfix(
                        ok=session.stats.success_count,
                        skip=session.stats.skipped_count,
                        fail=session.stats.failed_count,
                    )
                    index += 1

            stats = session.finish()
        finally:
            signal.signal(signal.SIGINT, previous)

        print_summary(stats, config, messages, failures)
        if session.cancelled:
            print(t("run.cancelled"))
        print(t("run.log_saved", path=run_log.path))

    if session.cancelled:
        return EXIT_CANCELLED
    return EXIT_ERROR if stats.failed_count > 0 else EXIT_OK


# ── CLI ───────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="media-organizer",
        description=(
            "Copy photos and videos from SOURCE into TARGET/YYYY/MM/MM-DD/, "
            "dated by EXIF capture time (photos) or modification time."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  media-organizer --source /Volumes/SD1/DCIM --target ~/Pictures/Library\n"
            "  media-organizer --source ~/Downloads --target ~/Pictures/Library "
            "--detection md5 --strategy rename\n"
            "  media-organizer --config ./media-organizer.json --no-progress\n"
        ),
    )
    parser.add_argument(
        "--source",
        metavar="PATH",
        help="Source directory, scanned recursively.",
    )
    parser.add_argument(
        "--target",
        metavar="PATH",
        help="Target root directory for the organized layout.",
    )
    parser.add_argument(
        "--detection",
        choices=[d.value for d in DuplicateDetection],
        default=None,
        help="How an existing target is recognized as a duplicate (default: filename).",
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in DuplicateStrategy],
        default=None,
        help="What to do with duplicates (default: skip).",
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        default=None,
        help="JSON config file (default: search ./media-organizer.json and the user config dir).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Console log level (default: info).",
    )
    parser.add_argument(
        "--log-dir",
        metavar="PATH",
        default=".",
        help="Directory for the run log file (default: current directory).",
    )
    parser.add_argument(
        "--lang",
        choices=["en", "zh"],
        default=None,
        help="Message language (default: detected from LANG).",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar (useful when piping output to log files).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cli_config = config_from_dict({
            "source_dir": args.source,
            "target_dir": args.target,
            "duplicate_detection": args.detection,
            "duplicate_strategy": args.strategy,
            "log_level": args.log_level,
            "language": args.lang,
            "config_file": args.config,
        })
        config = load_full_config(cli_config)
        messages = Messages(config.language)
        config.validate()
    except ConfigError as e:
        print(Messages(args.lang).t("config.error", error=e), file=sys.stderr)
        sys.exit(EXIT_ERROR)

    setup_logging(config.log_level)

    exit_code = run_organizer(
        config=config,
        messages=messages,
        log_dir=Path(args.log_dir).expanduser(),
        use_progress=not args.no_progress,
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
