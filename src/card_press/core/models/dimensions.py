"""
Module: dimensions

Purpose:
    Millimetre geometry shared by templates and the layout engine.
    Provides the Dimension dataclass, the supported page sizes and the
    card size presets offered when creating a template.

Key Classes:
    - Dimension: Width/height pair in millimetres
    - PageSize: Supported paper formats
    - CardSizePreset: Named card sizes (plus Custom)

Key Functions:
    - card_size_preset(dimension): Reverse lookup of a preset

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.templates.Template
    - builder.layout.grid
    - builder.output.renderer
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


@dataclass(frozen=True, slots=True)
class Dimension:
    """
    Width and height in millimetres.

    Attributes:
        width: Horizontal extent (mm)
        height: Vertical extent (mm)

    Invariants:
        - width > 0
        - height > 0

    Example:
        >>> Dimension(63, 88).width
        63
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate dimension on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")

    def to_dict(self) -> Dict[str, float]:
        return {"width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dimension":
        return cls(width=data["width"], height=data["height"])


class PageSize(str, Enum):
    """Paper formats a template can target."""

    A4 = "A4"
    LETTER = "Letter"

    @property
    def dimension(self) -> Dimension:
        """Page dimension in millimetres."""
        return PAGE_DIMENSIONS[self]


PAGE_DIMENSIONS: Dict[PageSize, Dimension] = {
    PageSize.A4: Dimension(210, 297),
    PageSize.LETTER: Dimension(216, 279),
}


class CardSizePreset(str, Enum):
    """Named card sizes offered by the template editor."""

    MTG = "MTG"
    YUGIOH = "Yu-Gi-Oh!"
    CUSTOM = "Custom"


CARD_SIZE_PRESETS: Dict[CardSizePreset, Dimension] = {
    CardSizePreset.MTG: Dimension(63, 88),
    CardSizePreset.YUGIOH: Dimension(59, 86),
}

DEFAULT_CARD_SIZE = CARD_SIZE_PRESETS[CardSizePreset.MTG]


def card_size_preset(dimension: Dimension) -> CardSizePreset:
    """
    Find the preset matching a card size exactly.

    Args:
        dimension: Card size in millimetres

    Returns:
        Matching preset, or CardSizePreset.CUSTOM

    Example:
        >>> card_size_preset(Dimension(59, 86))
        <CardSizePreset.YUGIOH: 'Yu-Gi-Oh!'>
    """
    for preset, size in CARD_SIZE_PRESETS.items():
        if size == dimension:
            return preset
    return CardSizePreset.CUSTOM
