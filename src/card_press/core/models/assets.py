"""
Module: assets

Purpose:
    Stored binary blobs - card images and background documents.
    Payloads are raw bytes tagged with a MIME type; the data URI text
    form is produced only when a snapshot is written.

Key Classes:
    - AssetPayload: Bytes + MIME type
    - StoredAsset: Payload with id, unique name and content hash

Dependencies:
    - dataclasses (std)
    - core.utils.data_uri: Text encoding

Used By:
    - assets.store.AssetStore
    - builder.controller: Resolver return type
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..utils.data_uri import decode_data_uri, encode_data_uri


@dataclass(frozen=True, slots=True)
class AssetPayload:
    """
    Binary payload with an explicit format tag.

    Attributes:
        data: Raw bytes (PNG, JPEG, PDF, ...)
        mime_type: Declared MIME type, e.g. "image/png"
    """

    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)

    def to_data_uri(self) -> str:
        return encode_data_uri(self.data, self.mime_type)

    @classmethod
    def from_data_uri(cls, uri: str) -> "AssetPayload":
        data, mime_type = decode_data_uri(uri)
        return cls(data=data, mime_type=mime_type)


@dataclass(frozen=True)
class StoredAsset:
    """
    An asset held by an AssetStore.

    Attributes:
        id: Store-assigned identifier (uuid4)
        name: Display name, unique within the store
        payload: Bytes + MIME type
        content_hash: Dedup key (see assets.hashing)
    """

    id: str
    name: str
    payload: AssetPayload
    content_hash: str

    @property
    def mime_type(self) -> str:
        return self.payload.mime_type

    @property
    def data(self) -> bytes:
        return self.payload.data

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot record, with the payload as a data URI."""
        return {
            "id": self.id,
            "name": self.name,
            "data": self.payload.to_data_uri(),
            "hash": self.content_hash,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredAsset":
        return cls(
            id=data["id"],
            name=data["name"],
            payload=AssetPayload.from_data_uri(data["data"]),
            content_hash=data["hash"],
        )
