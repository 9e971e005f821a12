from __future__ import annotations

"""
Handler Factories.

Every handler created here is tagged, so a reconfiguration removes exactly
the handlers this package installed and leaves those added by test
runners or embedding applications alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from codecraft_vfs.infra.logging.config import LoggingConfig, parse_level

_HANDLER_TAG_ATTR: str = "_codecraft_vfs_handler"


def tag_handler(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def is_tagged(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def build_console_handler(cfg: LoggingConfig) -> Optional[logging.Handler]:
    """Stderr handler for user-facing warnings, or None when disabled."""
    if cfg.console_level is None:
        return None
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(parse_level(cfg.console_level))
    sh.setFormatter(logging.Formatter(cfg.console_fmt))
    return tag_handler(sh)


def build_file_handler(cfg: LoggingConfig) -> Optional[logging.Handler]:
    """
    Rotating file handler for the diagnostic log.

    An unwritable location never prevents the CLI from running: the
    problem is reported on stderr and the file stream is skipped.
    """
    if not cfg.log_file:
        return None
    try:
        os.makedirs(os.path.dirname(os.path.abspath(cfg.log_file)), exist_ok=True)
        fh = RotatingFileHandler(
            cfg.log_file,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Log file unavailable at '{cfg.log_file}': {e}\n")
        return None

    fh.setLevel(parse_level(cfg.level))
    fh.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    return tag_handler(fh)
