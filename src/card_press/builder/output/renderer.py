"""
Module: builder.output.renderer

Purpose:
    Draw card images onto PDF pages using ReportLab.
    Pages are built incrementally so the engine can yield and check for
    cancellation between card placements.

Key Classes:
    - SheetCanvas: One in-memory PDF, page by page

Key Functions:
    - mm_to_pt(): Millimetres -> PDF points
    - transform_y(): Top-left slot Y -> bottom-left PDF Y

Coordinates:
    Slots are measured in millimetres from the top-left corner of the
    page; PDF user space has its origin at the bottom-left. A card's drawn
    Y is therefore (page_height - slot.y - card_height) * MM_TO_POINTS,
    while X converts directly.

Dependencies:
    - reportlab: PDF generation
    - builder.images: CardImage

Used By:
    - builder.controller: Generation entry point
"""

from __future__ import annotations

import io
import logging

from reportlab.pdfgen import canvas

from card_press.core.models import Dimension, Slot

from ..images import CardImage

logger = logging.getLogger(__name__)

# 1 inch = 72 points = 25.4 mm
MM_TO_POINTS = 72 / 25.4


def mm_to_pt(mm: float) -> float:
    """
    Convert millimetres to PDF points.

    Example:
        >>> round(mm_to_pt(25.4), 6)
        72.0
    """
    return mm * MM_TO_POINTS


def transform_y(page_height_mm: float, y_mm_top: float, height_mm: float) -> float:
    """
    Convert a top-down millimetre Y coordinate to bottom-up PDF points.

    Args:
        page_height_mm: Page height in millimetres
        y_mm_top: Distance of the element's top edge from the page top
        height_mm: Element height in millimetres

    Returns:
        Y of the element's bottom edge, in points from the page bottom
    """
    return (page_height_mm - y_mm_top - height_mm) * MM_TO_POINTS


class SheetCanvas:
    """
    Incrementally rendered card sheet.

    Usage is strictly sequential: draw the cards of a page, call
    end_page(), repeat, then finish() once.

    Attributes:
        page_size: Page dimension in millimetres
        card_size: Card dimension in millimetres
        page_count: Pages completed so far

    Example:
        >>> sheet = SheetCanvas(Dimension(100, 70), Dimension(50, 70))
        >>> sheet.draw_card(Slot(0, 0), image)
        True
        >>> sheet.end_page()
        >>> pdf_bytes = sheet.finish()
    """

    def __init__(self, page_size: Dimension, card_size: Dimension) -> None:
        self.page_size = page_size
        self.card_size = card_size
        self.page_count = 0
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=(mm_to_pt(page_size.width), mm_to_pt(page_size.height)),
        )
        self._finished = False

    def draw_card(self, slot: Slot, image: CardImage) -> bool:
        """
        Draw one card stretched to the card rectangle at ``slot``.

        Returns:
            True if the image was drawn, False if ReportLab rejected it
        """
        x_pt = mm_to_pt(slot.x)
        y_pt = transform_y(self.page_size.height, slot.y, self.card_size.height)
        width_pt = mm_to_pt(self.card_size.width)
        height_pt = mm_to_pt(self.card_size.height)

        try:
            self._canvas.drawImage(
                image.reader(),
                x_pt,
                y_pt,
                width=width_pt,
                height=height_pt,
                preserveAspectRatio=False,
                mask="auto",
            )
        except Exception as e:
            # A payload Pillow accepted can still fail inside ReportLab
            logger.debug(f"Failed to draw {image.format} image at ({slot.x}, {slot.y}): {e}")
            return False
        return True

    def end_page(self) -> None:
        """Close the current page; the next draw starts a new one."""
        self._canvas.showPage()
        self.page_count += 1

    def finish(self) -> bytes:
        """
        Serialize the document.

        Raises:
            RuntimeError: If called twice
        """
        if self._finished:
            raise RuntimeError("SheetCanvas already finished")
        self._canvas.save()
        self._finished = True
        data = self._buffer.getvalue()
        logger.debug(f"Serialized {self.page_count} page(s), {len(data)} bytes")
        return data
