"""
Module: templates

Purpose:
    Provides the Template and Slot dataclasses - the declarative page
    layout handed to the generation engine. A template names a page size,
    a card size, an ordered list of slot positions and, optionally, a
    background document stored in the document asset store.

Key Classes:
    - Slot: Top-left card position on a page (mm, top-left origin)
    - Template: Page size + card size + ordered slots + background

Dependencies:
    - dataclasses (std)
    - .dimensions: Dimension, PageSize

Used By:
    - builder.controller: Generation entry point
    - builder.layout.paginator: Slot count and order
    - catalog.defaults: Bundled templates

Invariants:
    Slot order defines placement order within a page. A template with no
    slots can be represented (templates are edited incrementally) but is
    rejected by the engine with NoSlotsError.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .dimensions import DEFAULT_CARD_SIZE, Dimension, PageSize


@dataclass(frozen=True, slots=True)
class Slot:
    """
    Card position on the page.

    Coordinates are millimetres measured from the top-left corner of the
    page. The renderer converts them to the PDF's bottom-left origin.

    Attributes:
        x: Offset from the left page edge (mm)
        y: Offset from the top page edge (mm)
    """

    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Slot":
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True)
class Template:
    """
    Page layout descriptor (immutable).

    Attributes:
        id: Template identifier
        name: Display name
        page_size: Target paper format
        card_size: Card dimension in millimetres
        slots: Ordered slot positions
        background_document_id: Optional id in the document asset store

    Example:
        >>> t = Template.create("3x3", PageSize.A4, Dimension(63, 88), [Slot(10, 10)])
        >>> t.slots_per_page
        1
    """

    id: str
    name: str
    page_size: PageSize
    card_size: Dimension = DEFAULT_CARD_SIZE
    slots: tuple[Slot, ...] = field(default_factory=tuple)
    background_document_id: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept any iterable of slots, store a tuple
        if not isinstance(self.slots, tuple):
            object.__setattr__(self, "slots", tuple(self.slots))
        if not isinstance(self.page_size, PageSize):
            object.__setattr__(self, "page_size", PageSize(self.page_size))

    @classmethod
    def create(
        cls,
        name: str,
        page_size: PageSize,
        card_size: Dimension,
        slots,
        background_document_id: Optional[str] = None,
    ) -> "Template":
        """Create a template with a freshly generated id."""
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            page_size=page_size,
            card_size=card_size,
            slots=tuple(slots),
            background_document_id=background_document_id,
        )

    @property
    def page_dimension(self) -> Dimension:
        """Page dimension in millimetres."""
        return self.page_size.dimension

    @property
    def slots_per_page(self) -> int:
        return len(self.slots)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the persisted field names."""
        return {
            "id": self.id,
            "name": self.name,
            "pageSize": self.page_size.value,
            "cardSize": self.card_size.to_dict(),
            "slots": [slot.to_dict() for slot in self.slots],
            "basePdfId": self.background_document_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Template":
        """
        Deserialize a template record.

        Raises:
            KeyError: If a required field is missing
            ValueError: If page size or dimensions are invalid
        """
        card_size = data.get("cardSize")
        return cls(
            id=data["id"],
            name=data["name"],
            page_size=PageSize(data["pageSize"]),
            card_size=Dimension.from_dict(card_size) if card_size else DEFAULT_CARD_SIZE,
            slots=tuple(Slot.from_dict(s) for s in data.get("slots", [])),
            background_document_id=data.get("basePdfId"),
        )
