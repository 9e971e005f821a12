from __future__ import annotations

from .config import LoggingConfig, get_default_log_path
from .core import active_listener, configure_logging, get_logger, shutdown_logging

__all__ = [
    "LoggingConfig",
    "configure_logging",
    "shutdown_logging",
    "active_listener",
    "get_logger",
    "get_default_log_path",
]
