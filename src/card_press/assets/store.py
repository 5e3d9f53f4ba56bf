"""
Module: assets.store

Purpose:
    Content-addressed store of binary assets (card fronts, card backs,
    background documents). Each store instance owns its collection;
    callers hold an explicit reference and there is no module-level state.

Key Classes:
    - AssetStore: add / get / delete / prune, snapshot save and load

Behaviour:
    - add_asset() deduplicates by content hash: adding content that is
      already stored returns the existing id and discards the new name.
    - Names are unique within a store: a colliding name gets " (2)",
      " (3)", ... inserted before its extension.
    - prune_unused() removes every asset whose id is not in a used set.

Dependencies:
    - assets.hashing: Content hash
    - assets.naming: Unique names
    - assets.persistence: Key-value backends

Used By:
    - builder.controller.GenerationRunner: Asset and background resolution
    - catalog.defaults: Bundled background documents
    - sources: Import adapters store fetched images here
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import AbstractSet, Dict, Iterator, List, Optional, Union

from card_press.core.models.assets import AssetPayload, StoredAsset
from card_press.core.utils.data_uri import (
    DEFAULT_MIME_TYPE,
    DataUriError,
    decode_data_uri,
    sniff_mime_type,
)

from .hashing import payload_hash, rolling_hash
from .naming import unique_name
from .persistence import KeyValueBackend

logger = logging.getLogger(__name__)

IMAGES_STORAGE_KEY = "card-press-images"
DOCUMENTS_STORAGE_KEY = "card-press-pdfs"
SNAPSHOT_VERSION = 0


class AssetStore:
    """
    Deduplicating store of named binary payloads.

    Attributes:
        key: Storage key used by save() / load()
        backend: Optional persistence medium

    Example:
        >>> store = AssetStore()
        >>> a = store.add_asset("card.png", png_bytes)
        >>> store.add_asset("copy.png", png_bytes) == a
        True
    """

    def __init__(
        self,
        backend: Optional[KeyValueBackend] = None,
        key: str = IMAGES_STORAGE_KEY,
    ) -> None:
        self.backend = backend
        self.key = key
        # Insertion ordered: snapshot order matches the order assets were added
        self._assets: Dict[str, StoredAsset] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # Mutation
    # ─────────────────────────────────────────────────────────────────────────

    def add_asset(
        self,
        name: str,
        data: Union[bytes, str],
        mime_type: Optional[str] = None,
    ) -> str:
        """
        Store a payload unless identical content is already present.

        Args:
            name: Desired display name (made unique if it collides)
            data: Raw bytes, or a base64 data URI string
            mime_type: MIME type for raw bytes; sniffed when omitted

        Returns:
            Id of the new asset, or of the existing asset with equal content
        """
        payload = _to_payload(data, mime_type)
        # Data URI text is hashed as given so it matches hashes recorded in older snapshots
        content_hash = rolling_hash(data) if isinstance(data, str) else payload_hash(payload)

        for asset in self._assets.values():
            if asset.content_hash == content_hash:
                logger.debug(f"Duplicate content for {name!r}, reusing {asset.name!r}")
                return asset.id

        resolved_name = unique_name(name, self.names)
        asset_id = str(uuid.uuid4())
        self._assets[asset_id] = StoredAsset(
            id=asset_id,
            name=resolved_name,
            payload=payload,
            content_hash=content_hash,
        )
        logger.debug(f"Stored {resolved_name!r} ({payload.mime_type}, {payload.size} bytes)")
        return asset_id

    def delete_asset(self, asset_id: str) -> None:
        """Remove an asset; unknown ids are ignored."""
        self._assets.pop(asset_id, None)

    def prune_unused(self, used_ids: AbstractSet[str]) -> int:
        """
        Delete every asset whose id is not in ``used_ids``.

        Args:
            used_ids: Ids still referenced by templates or card lists

        Returns:
            Number of assets removed (0 leaves the store untouched)
        """
        to_remove = [asset_id for asset_id in self._assets if asset_id not in used_ids]
        for asset_id in to_remove:
            del self._assets[asset_id]
        if to_remove:
            logger.info(f"Pruned {len(to_remove)} unused asset(s) from {self.key}")
        return len(to_remove)

    def clear(self) -> None:
        self._assets.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def get_asset(self, asset_id: str) -> Optional[StoredAsset]:
        return self._assets.get(asset_id)

    def resolve(self, asset_id: str) -> Optional[AssetPayload]:
        """Resolver for the generation engine: id -> payload or None."""
        asset = self._assets.get(asset_id)
        return asset.payload if asset is not None else None

    def find_by_name(self, query: str) -> Optional[StoredAsset]:
        """
        Look an asset up by display name.

        Tries, in order: exact case-insensitive match, an asset whose name
        contains the query, an asset whose name is contained in the query.
        """
        needle = query.lower()
        assets = list(self._assets.values())
        for asset in assets:
            if asset.name.lower() == needle:
                return asset
        for asset in assets:
            if needle in asset.name.lower():
                return asset
        for asset in assets:
            if asset.name.lower() in needle:
                return asset
        return None

    @property
    def names(self) -> set[str]:
        return {asset.name for asset in self._assets.values()}

    @property
    def ids(self) -> List[str]:
        return list(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[StoredAsset]:
        return iter(list(self._assets.values()))

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._assets

    # ─────────────────────────────────────────────────────────────────────────
    # Persistence
    # ─────────────────────────────────────────────────────────────────────────

    def to_snapshot(self) -> str:
        """Serialize the store as a JSON snapshot (payloads as data URIs)."""
        return json.dumps({
            "state": {"assets": [asset.to_dict() for asset in self._assets.values()]},
            "version": SNAPSHOT_VERSION,
        })

    def save(self) -> None:
        """
        Write the snapshot to the backend.

        Raises:
            RuntimeError: If the store has no backend
        """
        if self.backend is None:
            raise RuntimeError("AssetStore has no backend to save to")
        self.backend.set(self.key, self.to_snapshot())
        logger.debug(f"Saved {len(self._assets)} asset(s) to {self.key}")

    @classmethod
    def load(cls, backend: KeyValueBackend, key: str = IMAGES_STORAGE_KEY) -> "AssetStore":
        """
        Restore a store from a backend.

        Missing keys give an empty store. Malformed snapshots are logged and
        also give an empty store; individual malformed records are skipped.
        """
        store = cls(backend=backend, key=key)
        raw = backend.get(key)
        if raw is None:
            return store

        try:
            records = json.loads(raw)["state"]["assets"]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring malformed asset snapshot {key!r}: {e}")
            return store

        for record in records:
            try:
                asset = StoredAsset.from_dict(record)
            except (KeyError, TypeError, DataUriError) as e:
                logger.warning(f"Skipping malformed asset record in {key!r}: {e}")
                continue
            store._assets[asset.id] = asset

        logger.info(f"Loaded {len(store)} asset(s) from {key}")
        return store


def _to_payload(data: Union[bytes, str], mime_type: Optional[str]) -> AssetPayload:
    """Normalize add_asset() input to an AssetPayload."""
    if isinstance(data, str):
        try:
            raw, declared = decode_data_uri(data)
        except DataUriError as e:
            # Keep the text as an opaque blob; the engine will skip it
            logger.warning(f"Storing undecodable data URI as raw text: {e}")
            return AssetPayload(data=data.encode("utf-8"), mime_type=mime_type or DEFAULT_MIME_TYPE)
        return AssetPayload(data=raw, mime_type=mime_type or declared)
    raw = bytes(data)
    return AssetPayload(data=raw, mime_type=mime_type or sniff_mime_type(raw))
