"""
Tests for the bundled template catalog.
"""

import fitz
import pytest

from card_press.catalog import (
    DEFAULT_TEMPLATES,
    CatalogContext,
    load_default_templates,
    render_cutting_guide,
    used_document_ids,
)
from card_press.core.models import Dimension, PageSize, Template


class TestLoadDefaultTemplates:

    def test_load_when_empty_context_then_installs_all_defaults(self):
        ctx = CatalogContext()
        default_id = load_default_templates(ctx)

        assert [t.name for t in ctx.templates] == [d.name for d in DEFAULT_TEMPLATES]
        assert ctx.get_template(default_id).name == "A4 MTG 3x3"
        assert ctx.initialized

    def test_load_when_called_twice_then_no_duplicates(self):
        ctx = CatalogContext()
        first = load_default_templates(ctx)
        second = load_default_templates(ctx)

        assert first == second
        assert len(ctx.templates) == len(DEFAULT_TEMPLATES)
        assert len(ctx.documents) == 1

    def test_load_when_default_name_exists_then_keeps_user_template(self):
        existing = Template.create("A4 MTG 3x3", PageSize.A4, Dimension(63, 88), [])
        ctx = CatalogContext(templates=[existing])
        load_default_templates(ctx)

        same_name = [t for t in ctx.templates if t.name == "A4 MTG 3x3"]
        assert same_name == [existing]
        assert ctx.default_template_id is None

    def test_load_when_default_already_set_then_unchanged(self):
        ctx = CatalogContext(default_template_id="user-choice")
        assert load_default_templates(ctx) == "user-choice"

    def test_load_when_cutting_guide_then_background_stored_as_pdf(self):
        ctx = CatalogContext()
        load_default_templates(ctx)

        guide = next(t for t in ctx.templates if t.background_document_id)
        payload = ctx.documents.resolve(guide.background_document_id)
        assert payload.mime_type == "application/pdf"
        assert used_document_ids(ctx.templates) == {guide.background_document_id}
        assert ctx.documents.prune_unused(used_document_ids(ctx.templates)) == 0


@pytest.mark.parametrize("blueprint", DEFAULT_TEMPLATES, ids=lambda d: d.name)
def test_default_templates_when_built_then_nine_slots_on_page(blueprint):
    template = blueprint.build()
    page = template.page_dimension

    assert template.slots_per_page == 9
    for slot in template.slots:
        assert 0 <= slot.x and slot.x + template.card_size.width <= page.width
        assert 0 <= slot.y and slot.y + template.card_size.height <= page.height


def test_render_cutting_guide_when_rendered_then_single_page_with_marks():
    blueprint = DEFAULT_TEMPLATES[0]
    data = render_cutting_guide(PageSize.A4.dimension, blueprint.card_size, blueprint.slots())

    with fitz.open(stream=data, filetype="pdf") as doc:
        assert doc.page_count == 1
        assert doc[0].rect.width == pytest.approx(595.28, abs=0.1)
        assert len(doc[0].get_drawings()) > 0
