"""
Module: catalog.defaults

Purpose:
    Ready-made templates shipped with the library and the loader that
    installs them into a CatalogContext.

Key Classes:
    - DefaultTemplate: Blueprint for a bundled template
    - CatalogContext: Template list plus the asset stores it references

Key Functions:
    - load_default_templates(): Install missing bundled templates
    - used_document_ids(): Background ids still referenced by templates

Dependencies:
    - builder.layout.grid: Slot generation
    - catalog.guides: Bundled cutting-guide background
    - assets: Document store

Used By:
    - Host applications on first start
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from card_press.assets import AssetStore, DOCUMENTS_STORAGE_KEY
from card_press.builder.layout.grid import grid_for_page
from card_press.core.models import (
    CARD_SIZE_PRESETS,
    CardSizePreset,
    Dimension,
    PageSize,
    Template,
)

from .guides import render_cutting_guide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefaultTemplate:
    """
    Blueprint for a bundled template.

    Attributes:
        name: Display name, also the identity used to detect installs
        page_size: Paper format
        card_size: Card dimension (mm)
        cols: Grid columns
        rows: Grid rows
        gap: Space between cards (mm)
        is_default: Candidate for the catalog's default template
        bundled_background: Name of a generated background document, if any
    """

    name: str
    page_size: PageSize
    card_size: Dimension
    cols: int = 3
    rows: int = 3
    gap: float = 0.0
    is_default: bool = False
    bundled_background: Optional[str] = None

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise ValueError(f"Grid must be at least 1x1, got {self.cols}x{self.rows}")
        if self.gap < 0:
            raise ValueError(f"gap must be >= 0, got {self.gap}")

    def slots(self):
        return grid_for_page(self.cols, self.rows, self.gap, self.card_size, self.page_size)

    def render_background(self) -> bytes:
        """Generate this template's cutting guide."""
        return render_cutting_guide(self.page_size.dimension, self.card_size, self.slots())

    def build(self, background_document_id: Optional[str] = None) -> Template:
        return Template.create(
            name=self.name,
            page_size=self.page_size,
            card_size=self.card_size,
            slots=self.slots(),
            background_document_id=background_document_id,
        )


_MTG = CARD_SIZE_PRESETS[CardSizePreset.MTG]
_YUGIOH = CARD_SIZE_PRESETS[CardSizePreset.YUGIOH]

DEFAULT_TEMPLATES: tuple[DefaultTemplate, ...] = (
    DefaultTemplate("A4 MTG 3x3", PageSize.A4, _MTG, is_default=True),
    DefaultTemplate("Letter MTG 3x3", PageSize.LETTER, _MTG),
    DefaultTemplate("A4 Yu-Gi-Oh! 3x3", PageSize.A4, _YUGIOH),
    DefaultTemplate(
        "A4 MTG 3x3 (cutting guide)",
        PageSize.A4,
        _MTG,
        bundled_background="mtg-a4-cutting-guide.pdf",
    ),
)


@dataclass
class CatalogContext:
    """
    Everything the bundled templates are installed into.

    Passed explicitly instead of living in module state, so several
    catalogs (or tests) can coexist.

    Attributes:
        images: Card image store
        documents: Background document store
        templates: Installed templates, in display order
        default_template_id: Template preselected for new sessions
        initialized: Set once load_default_templates() has run
    """

    images: AssetStore = field(default_factory=AssetStore)
    documents: AssetStore = field(default_factory=lambda: AssetStore(key=DOCUMENTS_STORAGE_KEY))
    templates: List[Template] = field(default_factory=list)
    default_template_id: Optional[str] = None
    initialized: bool = False

    def get_template(self, template_id: str) -> Optional[Template]:
        for template in self.templates:
            if template.id == template_id:
                return template
        return None

    def template_names(self) -> Set[str]:
        return {template.name for template in self.templates}


def load_default_templates(
    ctx: CatalogContext,
    defaults: Iterable[DefaultTemplate] = DEFAULT_TEMPLATES,
) -> Optional[str]:
    """
    Install bundled templates that the context does not have yet.

    Templates are matched by name, so user-renamed copies are left alone and
    deleted defaults come back. Bundled backgrounds are stored in
    ``ctx.documents`` first (identical bytes deduplicate to one asset). The
    first ``is_default`` template installed becomes the default only when
    no default is set.

    Calling this again on the same context is a no-op.

    Args:
        ctx: Catalog to install into
        defaults: Blueprints to install

    Returns:
        The context's default template id (possibly None)
    """
    if ctx.initialized:
        return ctx.default_template_id
    ctx.initialized = True

    existing = ctx.template_names()
    missing = [d for d in defaults if d.name not in existing]

    for blueprint in missing:
        background_id = None
        if blueprint.bundled_background:
            background_id = ctx.documents.add_asset(
                blueprint.bundled_background,
                blueprint.render_background(),
                "application/pdf",
            )

        template = blueprint.build(background_id)
        ctx.templates.append(template)

        if blueprint.is_default and ctx.default_template_id is None:
            ctx.default_template_id = template.id

    if missing:
        logger.info(f"Installed {len(missing)} default template(s)")
    return ctx.default_template_id


def used_document_ids(templates: Iterable[Template]) -> Set[str]:
    """Background document ids referenced by ``templates``, for pruning."""
    return {t.background_document_id for t in templates if t.background_document_id}
