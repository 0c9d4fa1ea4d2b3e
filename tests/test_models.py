"""Tests for models.py — MediaFile, ProcessRecord and RunStatistics."""
import dataclasses
import random
from datetime import timedelta
from pathlib import Path

import pytest

from models import MediaFile, MediaKind, Outcome, ProcessRecord, RunStatistics


def _file(name: str = "photo.jpg", kind: MediaKind = MediaKind.PHOTO) -> MediaFile:
    return MediaFile.from_path(Path("/src") / name, kind, 10)


def _record(outcome: Outcome, kind: MediaKind = MediaKind.PHOTO) -> ProcessRecord:
    return ProcessRecord(_file(kind=kind), outcome, "")


class TestMediaFile:
    def test_from_path_fills_name(self):
        f = _file("IMG_0042.JPG")
        assert f.name == "IMG_0042.JPG"
        assert f.kind is MediaKind.PHOTO
        assert f.size == 10

    def test_lazy_fields_start_empty(self):
        f = _file()
        assert f.capture_date is None
        assert f.content_hash is None
        assert f.target_path is None


class TestProcessRecord:
    def test_is_immutable(self):
        rec = _record(Outcome.SUCCESS)
        with pytest.raises(dataclasses.FrozenInstanceError):
            rec.outcome = Outcome.FAILED


class TestRunStatistics:
    def test_defaults_are_zero(self):
        s = RunStatistics()
        assert s.total_files == 0
        assert s.processed_files == 0
        assert s.success_count == 0
        assert s.duration == timedelta(0)

    def test_record_counts_outcomes(self):
        s = RunStatistics()
        for outcome in (Outcome.SUCCESS, Outcome.SKIPPED, Outcome.FAILED, Outcome.SUCCESS):
            s.record(_record(outcome))
        assert s.processed_files == 4
        assert s.skipped_count == 1
        assert s.failed_count == 1
        assert s.success_count == 2

    def test_success_count_matches_records_for_any_sequence(self):
        rng = random.Random(1234)
        for _ in range(20):
            outcomes = [rng.choice(list(Outcome)) for _ in range(rng.randint(0, 40))]
            s = RunStatistics()
            for outcome in outcomes:
                s.record(_record(outcome))
            assert s.success_count == outcomes.count(Outcome.SUCCESS)

    def test_success_count_is_not_stored(self):
        names = {f.name for f in dataclasses.fields(RunStatistics)}
        assert "success_count" not in names

    def test_count_scanned_by_kind(self):
        s = RunStatistics()
        s.count_scanned(_file("a.jpg", MediaKind.PHOTO))
        s.count_scanned(_file("b.jpg", MediaKind.PHOTO))
        s.count_scanned(_file("c.mp4", MediaKind.VIDEO))
        assert s.photo_count == 2
        assert s.video_count == 1

    def test_kind_counts_independent_of_outcome(self):
        s = RunStatistics()
        s.count_scanned(_file("a.jpg", MediaKind.PHOTO))
        s.record(_record(Outcome.FAILED))
        assert s.photo_count == 1
        assert s.failed_count == 1

    def test_speed(self):
        s = RunStatistics(processed_files=100, duration=timedelta(seconds=10))
        assert s.speed == 10.0

    def test_speed_zero_duration(self):
        s = RunStatistics(processed_files=100, duration=timedelta(0))
        assert s.speed == 0

    def test_finish_sets_duration(self):
        s = RunStatistics()
        s.start()
        s.finish()
        assert s.end_time >= s.start_time
        assert s.duration == s.end_time - s.start_time

    def test_finish_without_start(self):
        s = RunStatistics()
        s.finish()
        assert s.duration == timedelta(0)
        assert s.speed == 0
