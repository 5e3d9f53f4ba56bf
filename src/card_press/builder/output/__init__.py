"""
Module: builder.output

Purpose:
    PDF rendering for card sheets.
    Draws card images with ReportLab and composes the result over a
    background document with PyMuPDF.

Key Classes:
    - SheetCanvas: Incremental card-layer renderer

Key Functions:
    - open_background(): Load a background document
    - compose_over_background(): Overlay card pages on the background

Dependencies:
    - reportlab: PDF generation
    - fitz (PyMuPDF): Background page copying

Used By:
    - builder.controller: Pipeline orchestration
"""

from .renderer import MM_TO_POINTS, SheetCanvas, mm_to_pt, transform_y
from .background import compose_over_background, open_background

__all__ = [
    "MM_TO_POINTS",
    "SheetCanvas",
    "mm_to_pt",
    "transform_y",
    "compose_over_background",
    "open_background",
]
