"""
Module: sources.local

Purpose:
    Import adapter that matches card names against images already held in
    an AssetStore, e.g. from an earlier import. Nothing is downloaded.

Key Classes:
    - LocalStoreSource: CardSource backed by an AssetStore

Matching:
    AssetStore.find_by_name(): exact (case-insensitive) name, then a stored
    name containing the query, then a stored name contained in the query.

Dependencies:
    - assets.store: AssetStore

Used By:
    - Host applications: "Local" import option
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from card_press.assets import AssetStore
from card_press.builder.cancellation import CancellationToken

from .base import CardSource, FetchProgressCallback, FetchResult, ParsedCard, StoreAssetFn
from .parsing import parse_card_list

logger = logging.getLogger(__name__)

NOT_FOUND_ERROR = "Not found in local storage"


class LocalStoreSource(CardSource):
    """
    Resolve card names to assets already in ``store``.

    Example:
        >>> source = LocalStoreSource(images)
        >>> results = asyncio.run(source.fetch(source.parse("2 Sol Ring"), images.add_asset))
        >>> results[0].asset_id is not None
        True
    """

    id = "local"
    name = "Local Storage"
    placeholder = (
        "Enter image names (one per line):\n"
        "\n"
        "Mana Vault\n"
        "2 Counterspell\n"
        "3x Sol Ring\n"
        "\n"
        "These are matched against images that are already stored."
    )

    def __init__(self, store: AssetStore) -> None:
        self.store = store

    def parse(self, text: str) -> List[ParsedCard]:
        return parse_card_list(text)

    async def fetch(
        self,
        entries: Sequence[ParsedCard],
        store_asset: StoreAssetFn,
        on_progress: Optional[FetchProgressCallback] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> List[FetchResult]:
        # Matches are existing assets, so store_asset is never needed
        results: List[FetchResult] = []
        total = len(entries)

        for index, entry in enumerate(entries):
            if cancellation is not None and cancellation.cancelled:
                logger.info(f"Local import cancelled after {index}/{total} card(s)")
                break

            name = entry.label
            if on_progress is not None:
                on_progress(index + 1, total, name)

            found = self.store.find_by_name(name) if name else None
            if found is None:
                logger.debug(f"No stored image matches {name!r}")
                results.append(FetchResult(name=name, count=entry.count, error=NOT_FOUND_ERROR))
            else:
                results.append(FetchResult(
                    name=name,
                    count=entry.count,
                    asset_id=found.id,
                    preview=found.payload,
                ))

            await asyncio.sleep(0)

        return results
