"""
Unit tests for dimension, template and card models.
"""

import pytest

from card_press.core.models import (
    CARD_SIZE_PRESETS,
    DEFAULT_CARD_SIZE,
    CardEntry,
    CardSizePreset,
    Dimension,
    PageSize,
    Slot,
    Template,
    card_size_preset,
)


class TestDimension:
    """Tests for Dimension and the page/card presets."""

    def test_init_when_non_positive_then_raises_error(self):
        with pytest.raises(ValueError, match="width"):
            Dimension(0, 10)
        with pytest.raises(ValueError, match="height"):
            Dimension(10, -1)

    def test_page_size_when_a4_or_letter_then_uses_millimetres(self):
        assert PageSize.A4.dimension == Dimension(210, 297)
        assert PageSize.LETTER.dimension == Dimension(216, 279)

    def test_card_presets_when_known_then_match_trading_card_sizes(self):
        assert CARD_SIZE_PRESETS[CardSizePreset.MTG] == Dimension(63, 88)
        assert CARD_SIZE_PRESETS[CardSizePreset.YUGIOH] == Dimension(59, 86)
        assert DEFAULT_CARD_SIZE == Dimension(63, 88)

    def test_card_size_preset_when_unmatched_then_custom(self):
        assert card_size_preset(Dimension(59, 86)) is CardSizePreset.YUGIOH
        assert card_size_preset(Dimension(70, 120)) is CardSizePreset.CUSTOM


class TestTemplate:
    """Tests for Template construction and serialization."""

    def test_init_when_slots_is_list_then_stores_tuple(self):
        t = Template(id="t", name="T", page_size="Letter", slots=[Slot(0, 0)])
        assert t.slots == (Slot(0, 0),)
        assert t.page_size is PageSize.LETTER
        assert t.slots_per_page == 1

    def test_create_when_called_twice_then_ids_differ(self):
        a = Template.create("A", PageSize.A4, DEFAULT_CARD_SIZE, [])
        b = Template.create("A", PageSize.A4, DEFAULT_CARD_SIZE, [])
        assert a.id != b.id

    def test_from_dict_when_serialized_then_restores_template(self):
        t = Template(
            id="t1",
            name="Grid",
            page_size=PageSize.A4,
            card_size=Dimension(59, 86),
            slots=(Slot(1.5, 2.5), Slot(70, 2.5)),
            background_document_id="pdf-1",
        )
        data = t.to_dict()
        assert data["pageSize"] == "A4"
        assert data["basePdfId"] == "pdf-1"
        assert Template.from_dict(data) == t

    def test_from_dict_when_card_size_missing_then_uses_default(self):
        t = Template.from_dict({"id": "t", "name": "T", "pageSize": "A4", "slots": []})
        assert t.card_size == DEFAULT_CARD_SIZE
        assert t.background_document_id is None


class TestCardEntry:
    """Tests for CardEntry validation."""

    @pytest.mark.parametrize("count", [0, -3])
    def test_init_when_count_below_one_then_raises_error(self, count):
        with pytest.raises(ValueError, match=">= 1"):
            CardEntry(id="c", name="Card", count=count, front_asset_id="img")

    @pytest.mark.parametrize("count", [1.5, "2", True])
    def test_init_when_count_not_integer_then_raises_error(self, count):
        with pytest.raises(ValueError, match="integer"):
            CardEntry(id="c", name="Card", count=count, front_asset_id="img")

    def test_to_dict_when_no_back_then_omits_back_field(self):
        entry = CardEntry(id="c", name="Sol Ring", count=2, front_asset_id="img")
        assert entry.to_dict() == {"id": "c", "name": "Sol Ring", "count": 2, "imageId": "img"}

    def test_from_dict_when_back_present_then_restores_override(self):
        entry = CardEntry.from_dict(
            {"id": "c", "name": "X", "count": 1, "imageId": "f", "cardBackId": "b"}
        )
        assert entry.back_asset_id == "b"
