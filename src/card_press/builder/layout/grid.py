"""
Module: builder.layout.grid

Purpose:
    Generate a centered rectangular grid of slot positions.

Key Functions:
    - generate_grid(): Slots for explicit page/card dimensions
    - grid_for_page(): Same, for a named PageSize

Algorithm:
    total_width  = cols * card_width  + (cols - 1) * gap
    total_height = rows * card_height + (rows - 1) * gap
    The block is centered on the page and slots are emitted row-major,
    so slot order runs left-to-right, then top-to-bottom.

    Geometry is not validated: cards that do not fit give negative start
    offsets, which the engine draws as-is.

Dependencies:
    - core.models: Dimension, Slot, PageSize

Used By:
    - catalog.defaults: Bundled templates
"""

from __future__ import annotations

from typing import List

from card_press.core.models import Dimension, PageSize, Slot


def generate_grid(
    cols: int,
    rows: int,
    gap: float,
    card_size: Dimension,
    page_size: Dimension,
) -> List[Slot]:
    """
    Compute a centered grid of slots.

    Args:
        cols: Number of columns
        rows: Number of rows
        gap: Space between neighbouring cards (mm)
        card_size: Card dimension (mm)
        page_size: Page dimension (mm)

    Returns:
        ``cols * rows`` slots in row-major order

    Example:
        >>> slots = generate_grid(2, 1, 0, Dimension(50, 70), Dimension(100, 70))
        >>> [(s.x, s.y) for s in slots]
        [(0.0, 0.0), (50.0, 0.0)]
    """
    total_width = cols * card_size.width + (cols - 1) * gap
    total_height = rows * card_size.height + (rows - 1) * gap
    start_x = (page_size.width - total_width) / 2
    start_y = (page_size.height - total_height) / 2

    slots: List[Slot] = []
    for row in range(rows):
        for col in range(cols):
            slots.append(Slot(
                x=start_x + col * (card_size.width + gap),
                y=start_y + row * (card_size.height + gap),
            ))
    return slots


def grid_for_page(
    cols: int,
    rows: int,
    gap: float,
    card_size: Dimension,
    page_size: PageSize,
) -> List[Slot]:
    """generate_grid() for a named page size."""
    return generate_grid(cols, rows, gap, card_size, page_size.dimension)
