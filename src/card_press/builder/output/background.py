"""
Module: builder.output.background

Purpose:
    Place rendered card pages over a background document.
    Every output page starts as a fresh copy of the background's first
    page (a page object cannot be placed twice), and the matching card
    page is overlaid on it.

Key Functions:
    - open_background(): Payload -> open fitz.Document, or None
    - compose_over_background(): Card-layer PDF + background -> PDF

Alignment:
    The card layer is anchored at the background page's bottom-left
    corner, the same origin the card coordinates were computed against.
    When both pages share a size the layer covers the page exactly.

Dependencies:
    - fitz (PyMuPDF): Page copying and overlay

Used By:
    - builder.controller: Generation entry point
"""

from __future__ import annotations

import logging
from typing import Optional

import fitz

from card_press.core.models import AssetPayload

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


def open_background(payload: AssetPayload) -> Optional[fitz.Document]:
    """
    Open a background document.

    Args:
        payload: Stored PDF payload

    Returns:
        Open document with at least one page, or None if it cannot be used.
        The caller owns the document and must close it.
    """
    if payload.mime_type not in (PDF_MIME_TYPE, "application/x-pdf"):
        logger.warning(f"Background is {payload.mime_type!r}, not a PDF; using blank pages")
        return None

    try:
        doc = fitz.open(stream=payload.data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        logger.warning(f"Unreadable background document, using blank pages: {e}")
        return None

    if doc.page_count == 0:
        logger.warning("Background document has no pages, using blank pages")
        doc.close()
        return None
    return doc


def compose_over_background(cards_pdf: bytes, background: fitz.Document) -> bytes:
    """
    Overlay each card page on a copy of the background's first page.

    Args:
        cards_pdf: Card-layer PDF from SheetCanvas.finish()
        background: Document returned by open_background()

    Returns:
        Serialized PDF with one page per card-layer page
    """
    out = fitz.open()
    try:
        with fitz.open(stream=cards_pdf, filetype="pdf") as cards:
            for page_index in range(cards.page_count):
                out.insert_pdf(background, from_page=0, to_page=0)
                page = out[-1]
                layer = cards[page_index].rect
                page_height = page.rect.height
                target = fitz.Rect(0, page_height - layer.height, layer.width, page_height)
                page.show_pdf_page(target, cards, page_index)
        data = out.tobytes(garbage=3, deflate=True)
    finally:
        out.close()

    logger.debug(f"Composed {len(data)} bytes over background")
    return data
