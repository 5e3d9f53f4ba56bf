"""
Module: builder.layout

Purpose:
    Slot geometry and pagination for card sheets.
    Converts a card list into page/slot placements.

Key Functions:
    - generate_grid(): Centered grid of slots
    - expand_cards(): Repeat entries by count
    - paginate(): Assign cards to pages and slots

Key Classes:
    - CardPlacement: Card assigned to a slot
    - PagePlan: Single page layout plan
    - LayoutResult: All pages

Used By:
    - builder.controller: Generation entry point
    - catalog: Bundled templates
"""

from .grid import generate_grid, grid_for_page
from .models import CardPlacement, LayoutResult, PagePlan
from .paginator import expand_cards, paginate

__all__ = [
    # Geometry
    "generate_grid",
    "grid_for_page",
    # Models
    "CardPlacement",
    "PagePlan",
    "LayoutResult",
    # Functions
    "expand_cards",
    "paginate",
]
