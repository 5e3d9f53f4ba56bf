"""
Module: builder.config

Purpose:
    Options for a single generation run. Immutable configuration with
    validation on construction.

Key Classes:
    - GenerationMode: Fronts or backs pass
    - GenerationOptions: Mode, default back, progress callback, cancellation

Dependencies:
    - dataclasses (std)
    - builder.cancellation: CancellationToken

Used By:
    - builder.controller: generate_document()
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .cancellation import CancellationToken

# Cards placed between two yields to the event loop
DEFAULT_YIELD_EVERY = 3

ProgressCallback = Callable[[int, int], None]


class GenerationMode(str, Enum):
    """Which face of the cards a run produces."""

    FRONTS = "fronts"
    BACKS = "backs"


@dataclass(frozen=True)
class GenerationOptions:
    """
    Options for one generation run (immutable).

    Attributes:
        mode: FRONTS places front images; BACKS places per-card backs,
            falling back to ``default_back_asset_id``
        default_back_asset_id: Back image for cards without their own
        on_progress: Called as ``on_progress(current, total)`` after every
            placed card; must not block
        cancellation_token: Polled at every card boundary
        yield_every: Number of cards between yields to the event loop

    Example:
        >>> options = GenerationOptions(
        ...     mode=GenerationMode.BACKS,
        ...     default_back_asset_id="back-1",
        ... )
    """

    mode: GenerationMode = GenerationMode.FRONTS
    default_back_asset_id: Optional[str] = None
    on_progress: Optional[ProgressCallback] = None
    cancellation_token: Optional[CancellationToken] = None
    yield_every: int = DEFAULT_YIELD_EVERY

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.mode, GenerationMode):
            object.__setattr__(self, "mode", GenerationMode(self.mode))
        if self.yield_every < 1:
            raise ValueError(f"yield_every must be >= 1: {self.yield_every}")

    @property
    def is_cancelled(self) -> bool:
        return self.cancellation_token is not None and self.cancellation_token.cancelled
