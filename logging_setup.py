"""Console logging configuration for media-organizer."""

import logging
import sys


def setup_logging(level: str = "info") -> logging.Logger:
    """
    Attach a console handler to the root logger at the requested level.
    Returns the root logger.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(numeric)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric)
    console.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))
    root.addHandler(console)

    # exifread warns on every file it cannot parse; a missing EXIF block is
    # an expected fallback here, not a problem.
    logging.getLogger("exifread").setLevel(logging.ERROR)

    return root
