class OrganizerError(Exception):
    """Base class for every error raised by the organizer pipeline."""


class ConfigError(OrganizerError):
    """Invalid or unreadable configuration."""


class ScanError(OrganizerError):
    """Walking the source tree failed; the whole run is aborted."""


class DateExtractionError(OrganizerError):
    """The file could not be stat'ed, so no capture date exists."""


class DuplicateCheckError(OrganizerError):
    """Hashing the source or the existing target failed."""


class CopyError(OrganizerError):
    """Opening, writing or flushing the destination failed."""
