"""
Module: builder.errors

Purpose:
    Exceptions raised by the generation pipeline.

    Validation errors are raised before any rendering starts and are meant
    to be shown to the user verbatim. Per-slot problems (missing asset,
    unsupported image, no back available) are never raised; they are
    counted as skips on the GenerationResult. Cancellation is an outcome,
    not an exception.

Key Classes:
    - CardPressError: Base class
    - ValidationError: Input rejected before rendering
    - EmptyInputError: Expanded card list is empty
    - NoSlotsError: Template has no slots
"""

from __future__ import annotations


class CardPressError(Exception):
    """Base class for card_press errors."""
    pass


class ValidationError(CardPressError):
    """Generation input rejected before rendering."""
    pass


class EmptyInputError(ValidationError):
    """No cards to generate."""

    def __init__(self, message: str = "No cards to generate") -> None:
        super().__init__(message)


class NoSlotsError(ValidationError):
    """Template defines no slots."""

    def __init__(self, template_name: str = "") -> None:
        suffix = f": {template_name}" if template_name else ""
        super().__init__(f"Template has no slots defined{suffix}")
        self.template_name = template_name
