"""
Module: builder

Purpose:
    Card sheet generation pipeline. Expands a card list, paginates it onto
    a template's slots and renders fronts or backs to PDF.

Key Functions:
    - generate_document(): Coroutine producing one PDF
    - generate_document_sync(): Blocking wrapper
    - generate_grid(): Centered slot grid

Key Classes:
    - GenerationOptions: Mode, default back, progress, cancellation
    - GenerationResult: PDF bytes or cancellation outcome
    - GenerationRunner: One active generation at a time
    - CancellationToken: Cooperative cancel flag

Dependencies:
    - reportlab: Card layer rendering
    - fitz (PyMuPDF): Background documents
    - PIL: Image verification
"""

from .cancellation import CancellationToken
from .config import DEFAULT_YIELD_EVERY, GenerationMode, GenerationOptions
from .controller import (
    GenerationResult,
    GenerationRunner,
    GenerationStatus,
    generate_document,
    generate_document_sync,
)
from .errors import CardPressError, EmptyInputError, NoSlotsError, ValidationError
from .layout import expand_cards, generate_grid, grid_for_page, paginate

__all__ = [
    # Config
    "DEFAULT_YIELD_EVERY",
    "GenerationMode",
    "GenerationOptions",
    "CancellationToken",
    # Controller
    "generate_document",
    "generate_document_sync",
    "GenerationResult",
    "GenerationRunner",
    "GenerationStatus",
    # Errors
    "CardPressError",
    "ValidationError",
    "EmptyInputError",
    "NoSlotsError",
    # Layout
    "expand_cards",
    "generate_grid",
    "grid_for_page",
    "paginate",
]
