"""
Module: builder.layout.paginator

Purpose:
    Expand card entries into physical cards and distribute them over
    pages, one card per template slot.

Key Functions:
    - expand_cards(): Repeat each entry ``count`` times, order preserved
    - paginate(): Assign expanded cards to page/slot positions

Algorithm:
    slots_per_page = len(template.slots)
    total_pages    = ceil(len(expanded) / slots_per_page)
    Card ``expanded[p * slots_per_page + s]`` goes to slot ``s`` of page
    ``p``. Only the last page can be partially filled.

Dependencies:
    - builder.layout.models: CardPlacement, PagePlan, LayoutResult
    - builder.errors: EmptyInputError, NoSlotsError

Used By:
    - builder.controller: Generation entry point
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List

from card_press.core.models import CardEntry, ExpandedCard, Template

from ..errors import EmptyInputError, NoSlotsError
from .models import CardPlacement, LayoutResult, PagePlan

logger = logging.getLogger(__name__)


def expand_cards(entries: Iterable[CardEntry]) -> List[ExpandedCard]:
    """
    Repeat each card entry ``count`` times.

    Args:
        entries: Card list in user order

    Returns:
        Flat list of physical cards; length is the sum of counts

    Example:
        >>> [c.front_asset_id for c in expand_cards([a_x2, b_x1])]
        ['a', 'a', 'b']
    """
    expanded: List[ExpandedCard] = []
    for index, entry in enumerate(entries):
        card = ExpandedCard(
            front_asset_id=entry.front_asset_id,
            back_asset_id=entry.back_asset_id,
            entry_index=index,
        )
        expanded.extend([card] * entry.count)
    return expanded


def paginate(expanded: List[ExpandedCard], template: Template) -> LayoutResult:
    """
    Distribute expanded cards over pages.

    Args:
        expanded: Output of expand_cards()
        template: Template whose slots receive the cards

    Returns:
        LayoutResult with one PagePlan per output page

    Raises:
        EmptyInputError: If ``expanded`` is empty
        NoSlotsError: If the template has no slots
    """
    if not expanded:
        raise EmptyInputError()

    slots_per_page = template.slots_per_page
    if slots_per_page == 0:
        raise NoSlotsError(template.name)

    total_pages = math.ceil(len(expanded) / slots_per_page)
    pages: List[PagePlan] = []

    for page_index in range(total_pages):
        start = page_index * slots_per_page
        page_cards = expanded[start:start + slots_per_page]
        placements = tuple(
            CardPlacement(
                card=card,
                slot=template.slots[slot_index],
                slot_index=slot_index,
                global_index=start + slot_index,
            )
            for slot_index, card in enumerate(page_cards)
        )
        pages.append(PagePlan(index=page_index, placements=placements))

    logger.debug(
        f"Paginated {len(expanded)} cards onto {total_pages} page(s) "
        f"of {slots_per_page} slot(s)"
    )
    return LayoutResult(
        pages=tuple(pages),
        slots_per_page=slots_per_page,
        total_cards=len(expanded),
    )
