"""
Runtime configuration: strategy enums, the OrganizerConfig dataclass, and
JSON config-file discovery and merging.

Precedence when merging is CLI > config file > defaults. A value left empty
(None or "") in a higher layer never overrides a lower one.

Config file format (all keys optional):
    {
      "source_dir": "/Volumes/SD1/DCIM",
      "target_dir": "~/Pictures/Library",
      "duplicate_detection": "filename" | "md5",
      "duplicate_strategy": "skip" | "overwrite" | "rename",
      "log_level": "debug" | "info" | "warning" | "error",
      "language": "en" | "zh"
    }
"""

import enum
import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import List, Optional

from errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "media-organizer.json"

LOG_LEVELS = ("debug", "info", "warning", "error")


class DuplicateDetection(enum.Enum):
    """How a source file is judged equal to an existing target."""
    FILENAME = "filename"   # target path exists
    MD5 = "md5"             # target path exists and content hashes match


class DuplicateStrategy(enum.Enum):
    """What to do once a duplicate is found."""
    SKIP = "skip"
    OVERWRITE = "overwrite"
    RENAME = "rename"


@dataclass(frozen=True)
class OrganizerConfig:
    source_dir: Optional[Path] = None
    target_dir: Optional[Path] = None
    duplicate_detection: Optional[DuplicateDetection] = None
    duplicate_strategy: Optional[DuplicateStrategy] = None
    log_level: Optional[str] = None
    language: Optional[str] = None
    config_file: Optional[Path] = None

    def validate(self) -> None:
        """Raise ConfigError unless the config is complete and usable."""
        if not self.source_dir or not str(self.source_dir):
            raise ConfigError("Source directory must not be empty")
        if not self.target_dir or not str(self.target_dir):
            raise ConfigError("Target directory must not be empty")
        if not self.source_dir.exists():
            raise ConfigError(f"Source directory does not exist: {self.source_dir}")
        if not self.source_dir.is_dir():
            raise ConfigError(f"Source path is not a directory: {self.source_dir}")
        if not isinstance(self.duplicate_detection, DuplicateDetection):
            raise ConfigError(
                f"Invalid duplicate detection: {self.duplicate_detection!r}"
            )
        if not isinstance(self.duplicate_strategy, DuplicateStrategy):
            raise ConfigError(
                f"Invalid duplicate strategy: {self.duplicate_strategy!r}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {self.log_level!r}")


def default_config() -> OrganizerConfig:
    return OrganizerConfig(
        duplicate_detection=DuplicateDetection.FILENAME,
        duplicate_strategy=DuplicateStrategy.SKIP,
        log_level="info",
    )


def _parse_enum(enum_cls, value, key: str):
    if value is None or value == "" or isinstance(value, enum_cls):
        return value or None
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigError(f"Invalid {key} {value!r} (expected one of: {allowed})")


def _parse_path(value) -> Optional[Path]:
    if value is None or value == "":
        return None
    return Path(value).expanduser()


def config_from_dict(data: dict) -> OrganizerConfig:
    """Build a partial OrganizerConfig from plain (JSON or CLI) values."""
    log_level = data.get("log_level") or None
    if log_level is not None:
        log_level = str(log_level).lower()
    return OrganizerConfig(
        source_dir=_parse_path(data.get("source_dir")),
        target_dir=_parse_path(data.get("target_dir")),
        duplicate_detection=_parse_enum(
            DuplicateDetection, data.get("duplicate_detection"), "duplicate_detection"
        ),
        duplicate_strategy=_parse_enum(
            DuplicateStrategy, data.get("duplicate_strategy"), "duplicate_strategy"
        ),
        log_level=log_level,
        language=data.get("language") or None,
        config_file=_parse_path(data.get("config_file")),
    )


def load_config_file(path: Path) -> OrganizerConfig:
    """Read a JSON config file; raises ConfigError if unreadable or malformed."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Cannot parse config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return config_from_dict(data)


def config_search_paths() -> List[Path]:
    """Locations probed for a config file, highest precedence first."""
    home = Path.home()
    appdata = os.environ.get("APPDATA")
    config_root = Path(appdata) if appdata else home / ".config"
    return [
        Path.cwd() / CONFIG_FILENAME,
        config_root / "media-organizer" / "config.json",
        home / ".media-organizer.json",
    ]


def find_config_file() -> Optional[Path]:
    for candidate in config_search_paths():
        if candidate.is_file():
            return candidate
    return None


def merge_configs(*layers: Optional[OrganizerConfig]) -> OrganizerConfig:
    """Merge layers in increasing precedence; empty values are ignored."""
    result = OrganizerConfig()
    for layer in layers:
        if layer is None:
            continue
        overrides = {
            f.name: getattr(layer, f.name)
            for f in fields(layer)
            if getattr(layer, f.name) not in (None, "")
        }
        result = replace(result, **overrides)
    return result


def load_full_config(cli: OrganizerConfig) -> OrganizerConfig:
    """Resolve defaults, the config file (explicit or discovered) and CLI values."""
    config_path = cli.config_file or find_config_file()
    file_config = None
    if config_path is not None:
        logger.debug(f"Loading config file {config_path}")
        file_config = load_config_file(config_path)

    merged = merge_configs(default_config(), file_config, cli)
    if config_path is not None:
        merged = replace(merged, config_file=config_path)
    return merged
