"""
Shared fixtures for the media-organizer test suite.
"""
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

import pytest

from config import DuplicateDetection, DuplicateStrategy, OrganizerConfig
from messages import Messages


# ── File-creation helpers ─────────────────────────────────────────────────────

def make_file(
    path: Path,
    content: bytes = b"dummy content",
    mtime: Optional[datetime] = None,
) -> Path:
    """Create a file with the given content; create parent dirs as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    if mtime is not None:
        set_mtime(path, mtime)
    return path


def set_mtime(path: Path, when: datetime) -> None:
    ts = when.timestamp()
    os.utime(path, (ts, ts))


def make_config(
    src: Path,
    tgt: Path,
    detection: DuplicateDetection = DuplicateDetection.FILENAME,
    strategy: DuplicateStrategy = DuplicateStrategy.SKIP,
) -> OrganizerConfig:
    return OrganizerConfig(
        source_dir=src,
        target_dir=tgt,
        duplicate_detection=detection,
        duplicate_strategy=strategy,
        log_level="info",
        language="en",
    )


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def src(tmp_path: Path) -> Path:
    """Empty source directory."""
    d = tmp_path / "source"
    d.mkdir()
    return d


@pytest.fixture
def tgt(tmp_path: Path) -> Path:
    """Empty target directory."""
    d = tmp_path / "target"
    d.mkdir()
    return d


@pytest.fixture
def messages() -> Messages:
    return Messages("en")


@pytest.fixture
def fixed_date() -> datetime:
    return datetime(2024, 3, 15, 10, 30, 0)
