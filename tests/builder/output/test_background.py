"""
Unit tests for background document handling.
"""

import fitz

from card_press.builder.output import SheetCanvas, compose_over_background, open_background
from card_press.core.models import AssetPayload, Dimension


def _blank_layer(pages: int) -> bytes:
    sheet = SheetCanvas(Dimension(210, 297), Dimension(63, 88))
    for _ in range(pages):
        sheet.end_page()
    return sheet.finish()


def test_open_background_when_pdf_then_returns_document(background_pdf):
    doc = open_background(AssetPayload(background_pdf, "application/pdf"))
    assert doc is not None
    assert doc.page_count == 1
    doc.close()


def test_open_background_when_not_pdf_mime_then_none(png_bytes):
    assert open_background(AssetPayload(png_bytes, "image/png")) is None


def test_open_background_when_bytes_unreadable_then_none():
    assert open_background(AssetPayload(b"not a pdf at all", "application/pdf")) is None


def test_compose_when_layer_has_pages_then_background_on_every_page(background_pdf):
    background = open_background(AssetPayload(background_pdf, "application/pdf"))
    try:
        data = compose_over_background(_blank_layer(3), background)
    finally:
        background.close()

    with fitz.open(stream=data, filetype="pdf") as doc:
        assert doc.page_count == 3
        for page in doc:
            assert "BACKGROUND" in page.get_text()
