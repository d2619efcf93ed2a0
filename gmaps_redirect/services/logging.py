"""Logging utilities for gmaps-redirect."""

from __future__ import annotations

import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from typing import Optional


_ROOT_LOGGER_NAME = "gmaps_redirect"
_CONSOLE_FILTER_FLAG = "to_console"
_queue_listener: Optional[QueueListener] = None


class _ConsoleFilter(logging.Filter):
    """Allow only records flagged for console emission."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - simple predicate
        return bool(getattr(record, _CONSOLE_FILTER_FLAG, False))


def configure_logging(
    *,
    log_to_file: bool,
    log_file: Optional[Path],
    log_to_console: bool,
    verbose: bool = False,
) -> None:
    """
    Configure logging sinks for this process.

    Records are funnelled through a queue so that the background resolution
    worker never blocks on handler I/O. Console output only carries records
    flagged with :func:`console_kwargs`, unless ``verbose`` is set.
    """

    global _queue_listener
    stop_logging()

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handlers: list[logging.Handler] = []
    if log_to_file and log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    package_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    package_logger.setLevel(logging.DEBUG)
    package_logger.propagate = True

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        if verbose:
            console_handler.setLevel(logging.DEBUG)
        else:
            console_handler.addFilter(_ConsoleFilter())
        handlers.append(console_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    root_logger.addHandler(QueueHandler(log_queue))
    _queue_listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _queue_listener.start()


def stop_logging() -> None:
    """Flush and stop the queue listener, if one is running."""

    global _queue_listener
    if _queue_listener is None:
        return
    listener, _queue_listener = _queue_listener, None
    listener.stop()
    for handler in listener.handlers:
        handler.close()

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, QueueHandler):
            root_logger.removeHandler(handler)


def console_kwargs() -> dict[str, bool]:
    """Helper to flag log records for console emission."""

    return {_CONSOLE_FILTER_FLAG: True}


__all__ = ["configure_logging", "console_kwargs", "stop_logging"]
