"""
Logging helpers for streaming library logs to a host UI.

Records are pushed onto a queue as ``(message, level)`` tuples, which a UI
thread can drain without touching the logging machinery.
"""
from __future__ import annotations

import logging
from queue import Queue
from typing import Optional

PACKAGE_LOGGER = "card_press"


class QueueLogHandler(logging.Handler):
    """
    Logging handler that puts formatted records on a queue.

    DEBUG records are reported as INFO so per-card skips show up in simple
    consoles that only distinguish INFO/WARNING/ERROR.
    """

    def __init__(self, log_queue: Queue, level: int = logging.INFO):
        super().__init__(level)
        self.log_queue = log_queue
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = "INFO" if record.levelname == "DEBUG" else record.levelname
            self.log_queue.put((self.format(record), level))
        except Exception:
            self.handleError(record)


def attach_queue_handler(
    log_queue: Queue,
    logger_name: Optional[str] = PACKAGE_LOGGER,
    level: int = logging.INFO,
) -> QueueLogHandler:
    """
    Attach a QueueLogHandler to a logger.

    Args:
        log_queue: Queue receiving ``(message, level)`` tuples
        logger_name: Logger to attach to; None for the root logger
        level: Minimum level forwarded

    Returns:
        The attached handler, for detach_queue_handler()
    """
    logger = logging.getLogger(logger_name)
    handler = QueueLogHandler(log_queue, level)
    logger.addHandler(handler)
    if logger.getEffectiveLevel() > level:
        logger.setLevel(level)
    return handler


def detach_queue_handler(
    handler: QueueLogHandler,
    logger_name: Optional[str] = PACKAGE_LOGGER,
) -> None:
    """Remove a handler added by attach_queue_handler()."""
    logging.getLogger(logger_name).removeHandler(handler)
