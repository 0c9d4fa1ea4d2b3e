"""MD5 fingerprints used by md5 duplicate detection."""

import hashlib
from pathlib import Path

READ_SIZE = 64 * 1024


def compute_md5(file_path: Path, read_size: int = READ_SIZE) -> str:
    """
    Hex MD5 of the file's bytes, read read_size bytes at a time so large
    videos never sit in memory. OSError from open or read propagates
    unchanged; DuplicateDetector turns it into a per-file failure.
    """
    digest = hashlib.md5()
    with open(file_path, "rb") as f:
        for block in iter(lambda: f.read(read_size), b""):
            digest.update(block)
    return digest.hexdigest()
