"""Tests for scanner.py — classify_file and scan_directory."""
import os
from pathlib import Path

import pytest

from errors import ScanError
from models import MediaKind
from scanner import classify_file, scan_directory
from tests.conftest import make_file


# ── classify_file ─────────────────────────────────────────────────────────────

class TestClassifyFile:
    @pytest.mark.parametrize("ext", [
        ".arw", ".jpg", ".jpeg", ".png", ".heic", ".gif", ".bmp", ".raw",
    ])
    def test_photo_extensions(self, tmp_path, ext):
        assert classify_file(tmp_path / f"photo{ext}") is MediaKind.PHOTO

    @pytest.mark.parametrize("ext", [
        ".mp4", ".mov", ".avi", ".mkv", ".flv", ".wmv",
    ])
    def test_video_extensions(self, tmp_path, ext):
        assert classify_file(tmp_path / f"clip{ext}") is MediaKind.VIDEO

    @pytest.mark.parametrize("name", [
        "doc.pdf", "notes.txt", "raw.cr2", "scan.tiff", "clip.m4v", "clip.webm",
    ])
    def test_unsupported_returns_none(self, tmp_path, name):
        assert classify_file(tmp_path / name) is None

    def test_case_insensitive(self, tmp_path):
        assert classify_file(tmp_path / "photo.JPG") is MediaKind.PHOTO
        assert classify_file(tmp_path / "clip.MP4") is MediaKind.VIDEO
        assert classify_file(tmp_path / "photo.Heic") is MediaKind.PHOTO

    def test_no_extension(self, tmp_path):
        assert classify_file(tmp_path / "README") is None


# ── scan_directory ─────────────────────────────────────────────────────────────

class TestScanDirectory:
    def test_returns_list(self, src):
        make_file(src / "photo.jpg")
        result = scan_directory(src)
        assert isinstance(result, list)

    def test_populates_media_file(self, src):
        make_file(src / "photo.jpg", b"12345")
        [f] = scan_directory(src)
        assert f.path == src / "photo.jpg"
        assert f.name == "photo.jpg"
        assert f.kind is MediaKind.PHOTO
        assert f.size == 5
        assert f.capture_date is None
        assert f.target_path is None

    def test_mixed_media(self, src):
        make_file(src / "photo.jpg")
        make_file(src / "clip.mp4")
        kinds = {f.kind for f in scan_directory(src)}
        assert kinds == {MediaKind.PHOTO, MediaKind.VIDEO}

    def test_ignores_non_media_files(self, src):
        make_file(src / "photo.jpg")
        make_file(src / "notes.txt")
        make_file(src / "data.db")
        assert len(scan_directory(src)) == 1

    def test_recurses_into_subdirectories(self, src):
        make_file(src / "2024" / "03" / "photo.jpg")
        make_file(src / "2023" / "clip.mp4")
        assert len(scan_directory(src)) == 2

    def test_directories_never_classified(self, src):
        (src / "album.jpg").mkdir()
        make_file(src / "album.jpg" / "inner.png")
        result = scan_directory(src)
        assert [f.name for f in result] == ["inner.png"]

    def test_lexical_order(self, src):
        make_file(src / "b.jpg")
        make_file(src / "a.jpg")
        make_file(src / "sub" / "c.jpg")
        names = [f.name for f in scan_directory(src)]
        assert names == ["a.jpg", "b.jpg", "c.jpg"]

    def test_subdirectory_sorts_among_files(self, src):
        make_file(src / "z.jpg")
        make_file(src / "a" / "x.jpg")
        make_file(src / "m.jpg")
        make_file(src / "n" / "deep" / "y.jpg")
        rel = [f.path.relative_to(src).as_posix() for f in scan_directory(src)]
        assert rel == ["a/x.jpg", "m.jpg", "n/deep/y.jpg", "z.jpg"]

    def test_empty_directory(self, src):
        assert scan_directory(src) == []

    def test_missing_source_raises(self, tmp_path):
        with pytest.raises(ScanError):
            scan_directory(tmp_path / "nope")

    def test_broken_symlink_aborts_scan(self, src, tmp_path):
        make_file(src / "good.jpg")
        (src / "broken.jpg").symlink_to(tmp_path / "missing.jpg")
        with pytest.raises(ScanError):
            scan_directory(src)

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0,
        reason="root can read unreadable directories",
    )
    def test_unreadable_directory_aborts_scan(self, src):
        make_file(src / "ok.jpg")
        locked = src / "locked"
        make_file(locked / "photo.jpg")
        locked.chmod(0o000)
        try:
            with pytest.raises(ScanError):
                scan_directory(src)
        finally:
            locked.chmod(0o755)
