"""
Module: builder.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses representing card placements and pages.

Key Classes:
    - CardPlacement: One expanded card assigned to a slot
    - PagePlan: All placements on one output page
    - LayoutResult: Paginated card sequence

Dependencies:
    - dataclasses (std)
    - core.models: ExpandedCard, Slot

Used By:
    - builder.layout.paginator: Creates PagePlans
    - builder.controller: Walks placements while rendering
"""

from __future__ import annotations

from dataclasses import dataclass

from card_press.core.models import ExpandedCard, Slot


@dataclass(frozen=True)
class CardPlacement:
    """
    An expanded card assigned to a slot.

    Attributes:
        card: The physical card to place
        slot: Target slot on the page
        slot_index: Index of the slot within the template
        global_index: Index of the card in the expanded sequence

    Example:
        >>> placement.global_index
        11  # page 1, slot 2 of a 9-slot template
    """

    card: ExpandedCard
    slot: Slot
    slot_index: int
    global_index: int


@dataclass(frozen=True)
class PagePlan:
    """
    Layout plan for a single output page.

    Attributes:
        index: Page number (0-indexed)
        placements: Placements in slot order; the last page may hold fewer
            placements than the template has slots
    """

    index: int
    placements: tuple[CardPlacement, ...]

    @property
    def placement_count(self) -> int:
        """Number of cards on this page."""
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        return len(self.placements) == 0


@dataclass(frozen=True)
class LayoutResult:
    """
    Paginated card sequence.

    Attributes:
        pages: Page plans in output order
        slots_per_page: Slot count of the template
        total_cards: Length of the expanded card sequence
    """

    pages: tuple[PagePlan, ...]
    slots_per_page: int
    total_cards: int

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def total_placements(self) -> int:
        return sum(p.placement_count for p in self.pages)
