from __future__ import annotations

"""
Logging Lifecycle.

Log records from the store, the pipeline and the debounce timer thread are
funneled through one queue; a single listener thread owns the console and
file handlers, so records from different threads never interleave inside
a line and file rotation never runs on the timer thread.

`configure_logging` is idempotent for an identical configuration and
swaps the handlers when the configuration changes. `shutdown_logging`
drains the queue and detaches everything, so a process (or a test) can
run the CLI several times.
"""

import atexit
import logging
import queue
import threading
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from codecraft_vfs.infra.logging.config import LIBRARY_LOGGERS, LoggingConfig, parse_level
from codecraft_vfs.infra.logging.handlers import (
    build_console_handler,
    build_file_handler,
    is_tagged,
    tag_handler,
)

_lock = threading.Lock()
_listener: Optional[QueueListener] = None
_active: Optional[LoggingConfig] = None


def configure_logging(cfg: LoggingConfig) -> logging.Logger:
    """
    Install the queue-based handlers described by `cfg` on the root logger.

    Returns:
        logging.Logger: The root logger.
    """
    global _listener, _active
    root = logging.getLogger()

    with _lock:
        if _active == cfg:
            return root
        _detach(root)

        handlers: List[logging.Handler] = [
            h for h in (build_console_handler(cfg), build_file_handler(cfg)) if h is not None
        ]
        levels = [h.level for h in handlers] or [parse_level(cfg.level)]
        root.setLevel(min(levels))
        for name in LIBRARY_LOGGERS:
            logging.getLogger(name).setLevel(parse_level(cfg.library_level))

        _active = cfg
        if not handlers:
            return root

        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        root.addHandler(tag_handler(QueueHandler(log_queue)))
        _listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
        _listener.start()

    return root


def shutdown_logging() -> None:
    """Flush queued records to their handlers and remove this package's setup."""
    global _active
    with _lock:
        _detach(logging.getLogger())
        _active = None


def active_listener() -> Optional[QueueListener]:
    return _listener


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _detach(root: logging.Logger) -> None:
    global _listener
    for h in list(root.handlers):
        if is_tagged(h):
            root.removeHandler(h)
            h.close()

    if _listener is not None:
        _listener.stop()
        for h in _listener.handlers:
            h.close()
        _listener = None


atexit.register(shutdown_logging)
