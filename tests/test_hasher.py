"""Tests for hasher.py — streamed MD5."""
import hashlib

import pytest

from hasher import compute_md5
from tests.conftest import make_file


class TestComputeMd5:
    def test_known_content(self, tmp_path):
        data = b"hello md5"
        f = make_file(tmp_path / "test.bin", data)
        assert compute_md5(f) == hashlib.md5(data).hexdigest()

    def test_is_128_bit_hex(self, tmp_path):
        f = make_file(tmp_path / "test.bin", b"x")
        assert len(compute_md5(f)) == 32

    def test_empty_file_has_known_hash(self, tmp_path):
        f = make_file(tmp_path / "empty.bin", b"")
        assert compute_md5(f) == hashlib.md5(b"").hexdigest()

    def test_different_content_gives_different_hash(self, tmp_path):
        f1 = make_file(tmp_path / "a.bin", b"aaa")
        f2 = make_file(tmp_path / "b.bin", b"bbb")
        assert compute_md5(f1) != compute_md5(f2)

    def test_large_content_chunked_correctly(self, tmp_path):
        # 200 KB, forces multiple 64 KB chunk reads
        data = b"x" * (200 * 1024)
        f = make_file(tmp_path / "large.bin", data)
        assert compute_md5(f) == hashlib.md5(data).hexdigest()

    def test_missing_file_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            compute_md5(tmp_path / "gone.bin")

    def test_small_read_size_gives_same_digest(self, tmp_path):
        data = bytes(range(256)) * 10
        f = make_file(tmp_path / "odd.bin", data)
        assert compute_md5(f, read_size=7) == hashlib.md5(data).hexdigest()
