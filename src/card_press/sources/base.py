"""
Module: sources.base

Purpose:
    Contract for card import adapters. An adapter turns pasted text into
    card requests, then fetches an image for each request and stores it.

Key Classes:
    - ParsedCard: One requested line (count plus name and/or numeric id)
    - FetchResult: Outcome for one requested card
    - CardSource: Abstract adapter

Dependencies:
    - core.models: AssetPayload
    - builder.cancellation: CancellationToken

Used By:
    - sources.local: Local store adapter
    - Host applications: Import dialogs
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

from card_press.builder.cancellation import CancellationToken
from card_press.core.models import AssetPayload

# (name, bytes or data URI) -> stored asset id
StoreAssetFn = Callable[[str, Union[bytes, str]], str]
# (current, total, card name)
FetchProgressCallback = Callable[[int, int, str], None]


@dataclass(frozen=True)
class ParsedCard:
    """
    One requested card.

    Attributes:
        count: Copies requested (>= 1)
        name: Card name, when the line named one
        id: Numeric database id, for sources that accept ids
    """

    count: int
    name: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"count must be >= 1, got {self.count}")

    @property
    def label(self) -> str:
        if self.name:
            return self.name
        return str(self.id) if self.id is not None else ""


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of fetching one card.

    Exactly one of ``asset_id`` / ``error`` is set.

    Attributes:
        name: Requested (or resolved) card name
        count: Copies requested
        asset_id: Id of the stored image on success
        preview: The stored image payload on success
        error: Human readable failure reason
    """

    name: str
    count: int
    asset_id: Optional[str] = None
    preview: Optional[AssetPayload] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.asset_id is not None


class CardSource(ABC):
    """
    Abstract card import adapter.

    Implementations parse a pasted list and fetch images for it. Per-card
    failures are reported as FetchResult.error, never raised.

    Attributes:
        id: Registry key
        name: Display name
        placeholder: Example input shown in an empty text box
    """

    id: str = ""
    name: str = ""
    placeholder: str = ""

    @abstractmethod
    def parse(self, text: str) -> List[ParsedCard]:
        """
        Parse pasted text into card requests.

        Args:
            text: One card per line

        Returns:
            Requests in input order; unparseable lines are dropped
        """

    @abstractmethod
    async def fetch(
        self,
        entries: Sequence[ParsedCard],
        store_asset: StoreAssetFn,
        on_progress: Optional[FetchProgressCallback] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> List[FetchResult]:
        """
        Fetch and store an image for each entry.

        Args:
            entries: Parsed requests
            store_asset: Stores a fetched image, returning its id
            on_progress: Called as (current, total, name) per entry
            cancellation: Stops fetching when cancelled

        Returns:
            One result per processed entry, in order. A cancelled fetch
            returns the results gathered so far.
        """
