"""
Module: assets

Purpose:
    Content-addressed asset storage feeding the generation engine.

Key Classes:
    - AssetStore: Deduplicating store of named payloads
    - KeyValueBackend: Persistence contract (get/set/delete)
    - MemoryBackend, JsonFileBackend: Bundled backends

Key Functions:
    - rolling_hash(): 32-bit content checksum
    - unique_name(): " (n)" name suffixing
"""

from .hashing import payload_hash, rolling_hash
from .naming import unique_name
from .persistence import JsonFileBackend, KeyValueBackend, MemoryBackend
from .store import DOCUMENTS_STORAGE_KEY, IMAGES_STORAGE_KEY, AssetStore

__all__ = [
    "AssetStore",
    "IMAGES_STORAGE_KEY",
    "DOCUMENTS_STORAGE_KEY",
    "KeyValueBackend",
    "MemoryBackend",
    "JsonFileBackend",
    "payload_hash",
    "rolling_hash",
    "unique_name",
]
