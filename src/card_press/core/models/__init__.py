"""
Core Models Package

Immutable data models shared by the asset store, the catalog and the
generation engine.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. Templates and card
entries are passed by value into the engine, which never mutates them,
so freezing them turns that contract into an enforced one.

| Model | Meaning |
|-------|---------|
| `Dimension` | Width/height in millimetres |
| `Slot` | Top-left card position on a page (mm) |
| `Template` | Page size + card size + ordered slots + background |
| `CardEntry` | Card list line with a repeat count |
| `ExpandedCard` | One physical card placement |
| `AssetPayload` | Bytes + MIME type |
| `StoredAsset` | Payload with id, unique name and content hash |
"""

from .dimensions import (
    CARD_SIZE_PRESETS,
    DEFAULT_CARD_SIZE,
    PAGE_DIMENSIONS,
    CardSizePreset,
    Dimension,
    PageSize,
    card_size_preset,
)
from .templates import Slot, Template
from .cards import CardEntry, ExpandedCard
from .assets import AssetPayload, StoredAsset

__all__ = [
    "CARD_SIZE_PRESETS",
    "DEFAULT_CARD_SIZE",
    "PAGE_DIMENSIONS",
    "CardSizePreset",
    "Dimension",
    "PageSize",
    "card_size_preset",
    "Slot",
    "Template",
    "CardEntry",
    "ExpandedCard",
    "AssetPayload",
    "StoredAsset",
]
