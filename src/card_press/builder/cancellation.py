"""
Module: builder.cancellation

Purpose:
    Cooperative cancellation for long-running generation and import jobs.
    The engine polls the token between card placements; it never
    interrupts a placement in progress.

Key Classes:
    - CancellationToken: Thread-safe cancel flag

Used By:
    - builder.controller: Checked at every card boundary
    - sources: Checked between fetched entries
"""

from __future__ import annotations

import threading


class CancellationToken:
    """
    One-shot cancel flag shared between a job and whoever may stop it.

    Backed by a threading.Event so a UI thread can cancel a job running
    on an asyncio loop elsewhere. A token cannot be reset; start each job
    with a fresh one.

    Example:
        >>> token = CancellationToken()
        >>> token.cancelled
        False
        >>> token.cancel()
        >>> token.cancelled
        True
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation (idempotent)."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"<CancellationToken {state}>"
