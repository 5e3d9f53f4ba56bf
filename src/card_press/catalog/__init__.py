"""
Module: catalog

Purpose:
    Bundled templates and the loader that installs them.

Key Functions:
    - load_default_templates(): Idempotent install into a CatalogContext
    - used_document_ids(): Referenced background ids
    - render_cutting_guide(): Crop-mark background PDF
"""

from .defaults import (
    DEFAULT_TEMPLATES,
    CatalogContext,
    DefaultTemplate,
    load_default_templates,
    used_document_ids,
)
from .guides import render_cutting_guide

__all__ = [
    "DEFAULT_TEMPLATES",
    "CatalogContext",
    "DefaultTemplate",
    "load_default_templates",
    "used_document_ids",
    "render_cutting_guide",
]
