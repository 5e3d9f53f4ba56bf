"""Shared helpers that do not belong to a single subsystem."""

from .logging_utils import (
    PACKAGE_LOGGER,
    QueueLogHandler,
    attach_queue_handler,
    detach_queue_handler,
)

__all__ = [
    "PACKAGE_LOGGER",
    "QueueLogHandler",
    "attach_queue_handler",
    "detach_queue_handler",
]
