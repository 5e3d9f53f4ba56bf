"""
Module: catalog.guides

Purpose:
    Draw printable cutting guides: crop marks just outside every card
    corner, so printed sheets can be trimmed after the cards are laid over.

Key Functions:
    - render_cutting_guide(): Template geometry -> single-page PDF bytes

Dependencies:
    - reportlab: PDF generation
    - builder.output.renderer: Millimetre/point conversion

Used By:
    - catalog.defaults: Bundled background for the cutting-guide template
"""

from __future__ import annotations

import io
from typing import Sequence

from reportlab.lib.colors import Color
from reportlab.pdfgen import canvas

from card_press.builder.output.renderer import mm_to_pt, transform_y
from card_press.core.models import Dimension, Slot

CROP_MARK_LENGTH_MM = 4.0
CROP_MARK_OFFSET_MM = 1.0
CROP_MARK_WIDTH_PT = 0.5
CROP_MARK_COLOR = Color(0.55, 0.55, 0.55)


def render_cutting_guide(
    page_size: Dimension,
    card_size: Dimension,
    slots: Sequence[Slot],
) -> bytes:
    """
    Render one guide page for a slot layout.

    Each slot gets eight short marks, two per corner, running outward along
    the card edges and starting a small offset away from the corner.

    Args:
        page_size: Page dimension (mm)
        card_size: Card dimension (mm)
        slots: Slot positions (mm from the top-left)

    Returns:
        PDF bytes with exactly one page
    """
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=(mm_to_pt(page_size.width), mm_to_pt(page_size.height)))
    c.setTitle("Cutting guide")
    c.setStrokeColor(CROP_MARK_COLOR)
    c.setLineWidth(CROP_MARK_WIDTH_PT)

    offset = mm_to_pt(CROP_MARK_OFFSET_MM)
    length = mm_to_pt(CROP_MARK_LENGTH_MM)
    width_pt = mm_to_pt(card_size.width)
    height_pt = mm_to_pt(card_size.height)

    for slot in slots:
        left = mm_to_pt(slot.x)
        bottom = transform_y(page_size.height, slot.y, card_size.height)
        right = left + width_pt
        top = bottom + height_pt

        # (corner x, corner y, outward x direction, outward y direction)
        for x, y, dx, dy in (
            (left, bottom, -1, -1),
            (right, bottom, 1, -1),
            (left, top, -1, 1),
            (right, top, 1, 1),
        ):
            c.line(x, y + dy * offset, x, y + dy * (offset + length))
            c.line(x + dx * offset, y, x + dx * (offset + length), y)

    c.showPage()
    c.save()
    return buffer.getvalue()
