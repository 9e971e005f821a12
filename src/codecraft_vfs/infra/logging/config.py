from __future__ import annotations

"""
Logging Settings.

The CLI writes two diagnostic streams: a terse console stream that only
shows what the user should act on, and a detailed rotating file that keeps
every workspace operation and sync attempt, including those made from the
debounce timer thread.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from codecraft_vfs.infra.fs import get_user_data_dir

LOG_FILE_NAME = "codecraft_vfs.log"

# Chatty transport loggers pulled in by the remote client
LIBRARY_LOGGERS: Tuple[str, ...] = ("urllib3", "requests")

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def parse_level(level: Optional[str]) -> int:
    """Convert a level name to its numeric constant, INFO when unknown."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def get_default_log_path() -> str:
    """Location of the diagnostic log inside the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", LOG_FILE_NAME)


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable description of the logging setup.

    Attributes:
        level: Minimum severity written to the log file.
        console_level: Minimum severity echoed to stderr; None disables it.
        log_file: Path of the rotating log file; None disables it.
        max_bytes: Size of one log segment before rotation.
        backup_count: Number of rotated segments to keep.
        library_level: Level applied to the transport library loggers.
    """
    level: str = "INFO"
    console_level: Optional[str] = "WARNING"
    log_file: Optional[str] = None

    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3
    library_level: str = "WARNING"

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any], debug: bool = False) -> LoggingConfig:
        """
        Derive the CLI logging setup from the application configuration.

        `--debug` raises both streams to DEBUG; otherwise the file follows
        `log_level` and the console only shows warnings.
        """
        if debug:
            return cls(level="DEBUG", console_level="DEBUG",
                       log_file=settings.get("log_file") or None)
        return cls(
            level=settings.get("log_level") or "INFO",
            log_file=settings.get("log_file") or None,
        )
