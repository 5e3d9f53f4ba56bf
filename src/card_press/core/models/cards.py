"""
Module: cards

Purpose:
    Card list records. A CardEntry is one line of the user's card list
    (an image plus how many copies to print); ExpandedCard is a single
    physical copy, the unit the paginator places into slots.

Key Classes:
    - CardEntry: Card list line with a repeat count
    - ExpandedCard: One physical card placement

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.paginator: expand_cards()
    - builder.controller: Generation entry point
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CardEntry:
    """
    A card in the list, printed ``count`` times.

    Attributes:
        id: Entry identifier
        name: Display name
        count: Number of physical copies (>= 1)
        front_asset_id: Image asset for the card face
        back_asset_id: Optional per-card back image (overrides the default back)

    Example:
        >>> entry = CardEntry.create("Sol Ring", "img-1", count=4)
        >>> entry.count
        4
    """

    id: str
    name: str
    count: int
    front_asset_id: str
    back_asset_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate entry on construction."""
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise ValueError(f"count must be an integer: {self.count!r}")
        if self.count < 1:
            raise ValueError(f"count must be >= 1: {self.count}")

    @classmethod
    def create(
        cls,
        name: str,
        front_asset_id: str,
        count: int = 1,
        back_asset_id: Optional[str] = None,
    ) -> "CardEntry":
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            count=count,
            front_asset_id=front_asset_id,
            back_asset_id=back_asset_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "count": self.count,
            "imageId": self.front_asset_id,
        }
        if self.back_asset_id is not None:
            data["cardBackId"] = self.back_asset_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CardEntry":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            count=data["count"],
            front_asset_id=data["imageId"],
            back_asset_id=data.get("cardBackId"),
        )


@dataclass(frozen=True, slots=True)
class ExpandedCard:
    """
    One physical card to place.

    Attributes:
        front_asset_id: Image asset for the card face
        back_asset_id: Per-card back override, if any
        entry_index: Index of the CardEntry this copy came from
    """

    front_asset_id: str
    back_asset_id: Optional[str]
    entry_index: int
