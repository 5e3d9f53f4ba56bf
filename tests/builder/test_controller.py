"""
Tests for generate_document() and GenerationRunner.

Generated PDFs are inspected with PyMuPDF.
"""

import asyncio

import fitz
import pytest

from card_press.assets import DOCUMENTS_STORAGE_KEY, AssetStore
from card_press.builder import (
    CancellationToken,
    EmptyInputError,
    GenerationMode,
    GenerationOptions,
    GenerationRunner,
    GenerationStatus,
    NoSlotsError,
    generate_document,
    generate_document_sync,
)
from card_press.builder import controller as controller_module
from card_press.core.models import AssetPayload, CardEntry, Dimension, PageSize, Slot, Template


def _entry(front: str, count: int = 1, back=None) -> CardEntry:
    return CardEntry(id=f"e-{front}", name=front, count=count, front_asset_id=front, back_asset_id=back)


def _image_counts(data: bytes) -> list:
    with fitz.open(stream=data, filetype="pdf") as doc:
        return [len(page.get_image_info()) for page in doc]


@pytest.fixture
def images(png_bytes, jpeg_bytes) -> AssetStore:
    store = AssetStore()
    store.add_asset("front.png", png_bytes)
    store.add_asset("back.jpg", jpeg_bytes)
    return store


@pytest.fixture
def ids(images):
    return {asset.name: asset.id for asset in images}


class TestGenerateFronts:
    """Fronts mode: pagination, placement and progress."""

    def test_generate_when_five_cards_two_slots_then_three_pages(self, two_slot_template, images, ids):
        result = generate_document_sync(two_slot_template, [_entry(ids["front.png"], 5)], images.resolve)

        assert result.status is GenerationStatus.DONE
        assert result.page_count == 3
        assert result.placed_count == 5
        assert result.skipped_count == 0
        assert _image_counts(result.data) == [2, 2, 1]

    def test_generate_when_three_entries_two_slots_then_last_slot_blank(self, images, ids):
        template = Template(
            id="t",
            name="Two across",
            page_size=PageSize.A4,
            card_size=Dimension(50, 70),
            slots=(Slot(0, 0), Slot(50, 0)),
        )
        cards = [_entry(ids["front.png"]), _entry(ids["back.jpg"]), _entry(ids["front.png"])]
        result = generate_document_sync(template, cards, images.resolve)

        assert result.page_count == 2
        assert result.placed_count == 3
        assert _image_counts(result.data) == [2, 1]

    def test_generate_when_progress_then_monotonic_and_reaches_total(self, two_slot_template, images, ids):
        calls = []
        options = GenerationOptions(on_progress=lambda current, total: calls.append((current, total)))
        generate_document_sync(two_slot_template, [_entry(ids["front.png"], 4)], images.resolve, options=options)

        assert calls == [(1, 4), (2, 4), (3, 4), (4, 4)]

    def test_generate_when_asset_missing_then_slot_skipped(self, two_slot_template, images, ids):
        calls = []
        options = GenerationOptions(on_progress=lambda current, total: calls.append(current))
        cards = [_entry("missing"), _entry(ids["front.png"])]
        result = generate_document_sync(two_slot_template, cards, images.resolve, options=options)

        assert result.placed_count == 1
        assert result.skipped_count == 1
        assert calls == [2]
        assert _image_counts(result.data) == [1]

    def test_generate_when_unsupported_or_corrupt_payload_then_skipped(self, two_slot_template, png_bytes):
        payloads = {
            "gif": AssetPayload(b"GIF89a....", "image/gif"),
            "lying": AssetPayload(png_bytes, "image/jpeg"),
        }
        result = generate_document_sync(
            two_slot_template, [_entry("gif"), _entry("lying")], payloads.get
        )
        assert result.status is GenerationStatus.DONE
        assert result.skipped_count == 2
        assert result.page_count == 1

    def test_generate_when_image_exceeds_pixel_limit_then_slot_skipped(self, two_slot_template, images, ids, oversized_png):
        payloads = {"huge": AssetPayload(oversized_png, "image/png")}

        def resolve(asset_id):
            return payloads.get(asset_id) or images.resolve(asset_id)

        cards = [_entry("huge"), _entry(ids["front.png"])]
        result = generate_document_sync(two_slot_template, cards, resolve)

        assert result.status is GenerationStatus.DONE
        assert result.skipped_count == 1
        assert result.placed_count == 1
        assert _image_counts(result.data) == [1]

    def test_generate_when_resolver_raises_then_slot_skipped(self, two_slot_template):
        def broken(asset_id):
            raise OSError("disk gone")

        result = generate_document_sync(two_slot_template, [_entry("a")], broken)
        assert result.skipped_count == 1

    def test_generate_when_no_cards_then_raises_empty_input(self, two_slot_template, images):
        with pytest.raises(EmptyInputError):
            generate_document_sync(two_slot_template, [], images.resolve)

    def test_generate_when_template_has_no_slots_then_raises_no_slots(self, two_slot_template, images, ids):
        from dataclasses import replace

        empty = replace(two_slot_template, slots=())
        with pytest.raises(NoSlotsError):
            generate_document_sync(empty, [_entry(ids["front.png"])], images.resolve)

    def test_generate_when_many_cards_then_yields_every_three(self, two_slot_template, images, ids, monkeypatch):
        sleeps = []

        async def fake_sleep(delay):
            sleeps.append(delay)

        monkeypatch.setattr(controller_module.asyncio, "sleep", fake_sleep)
        generate_document_sync(two_slot_template, [_entry(ids["front.png"], 7)], images.resolve)
        assert sleeps == [0, 0]


class TestGenerateBacks:
    """Backs mode: per-card backs, default back, skips."""

    def test_generate_when_no_back_anywhere_then_blank_pages(self, two_slot_template, images, ids):
        options = GenerationOptions(mode=GenerationMode.BACKS)
        result = generate_document_sync(two_slot_template, [_entry(ids["front.png"], 3)], images.resolve, options=options)

        assert result.status is GenerationStatus.DONE
        assert result.placed_count == 0
        assert result.skipped_count == 3
        assert _image_counts(result.data) == [0, 0]

    def test_generate_when_default_back_then_used_for_cards_without_back(self, two_slot_template, images, ids):
        options = GenerationOptions(mode="backs", default_back_asset_id=ids["back.jpg"])
        cards = [_entry(ids["front.png"], 2)]
        result = generate_document_sync(two_slot_template, cards, images.resolve, options=options)

        assert result.mode is GenerationMode.BACKS
        assert result.placed_count == 2

    def test_generate_when_card_back_override_then_preferred(self, two_slot_template, images, ids):
        seen = []

        def resolve(asset_id):
            seen.append(asset_id)
            return images.resolve(asset_id)

        options = GenerationOptions(mode=GenerationMode.BACKS, default_back_asset_id="default-back")
        cards = [_entry(ids["front.png"], back=ids["back.jpg"])]
        generate_document_sync(two_slot_template, cards, resolve, options=options)
        assert seen == [ids["back.jpg"]]


class TestBackground:
    """Background document composition."""

    def test_generate_when_background_then_every_page_has_it(self, two_slot_template, images, ids, background_pdf):
        documents = AssetStore(key=DOCUMENTS_STORAGE_KEY)
        bg_id = documents.add_asset("bg.pdf", background_pdf)
        from dataclasses import replace

        template = replace(two_slot_template, background_document_id=bg_id)
        result = generate_document_sync(template, [_entry(ids["front.png"], 3)], images.resolve, documents.resolve)

        with fitz.open(stream=result.data, filetype="pdf") as doc:
            assert doc.page_count == 2
            assert all("BACKGROUND" in page.get_text() for page in doc)
            assert [len(page.get_image_info()) for page in doc] == [2, 1]
        assert result.warnings == ()

    def test_generate_when_background_unreadable_then_blank_pages_with_warning(self, two_slot_template, images, ids):
        from dataclasses import replace

        payloads = {"bg": AssetPayload(b"garbage", "application/pdf")}
        template = replace(two_slot_template, background_document_id="bg")
        result = generate_document_sync(template, [_entry(ids["front.png"])], images.resolve, payloads.get)

        assert result.status is GenerationStatus.DONE
        assert result.page_count == 1
        assert len(result.warnings) == 1

    def test_generate_when_background_missing_then_warns(self, two_slot_template, images, ids):
        from dataclasses import replace

        template = replace(two_slot_template, background_document_id="nope")
        result = generate_document_sync(template, [_entry(ids["front.png"])], images.resolve, lambda _: None)
        assert "not found" in result.warnings[0]


class TestCancellation:
    """Cooperative cancellation."""

    def test_generate_when_cancelled_mid_run_then_no_data_and_no_more_progress(self, two_slot_template, images, ids):
        token = CancellationToken()
        calls = []

        def on_progress(current, total):
            calls.append(current)
            if current == 2:
                token.cancel()

        options = GenerationOptions(on_progress=on_progress, cancellation_token=token)
        result = generate_document_sync(two_slot_template, [_entry(ids["front.png"], 5)], images.resolve, options=options)

        assert result.status is GenerationStatus.CANCELLED
        assert result.cancelled is True
        assert result.data is None
        assert calls == [1, 2]
        assert result.placed_count == 2

    def test_generate_when_cancelled_before_start_then_nothing_drawn(self, two_slot_template, images, ids):
        token = CancellationToken()
        token.cancel()
        options = GenerationOptions(cancellation_token=token)
        result = generate_document_sync(two_slot_template, [_entry(ids["front.png"])], images.resolve, options=options)

        assert result.cancelled
        assert result.placed_count == 0

    def test_generate_when_cancelled_from_other_task_then_stops(self, two_slot_template, images, ids):
        token = CancellationToken()
        options = GenerationOptions(cancellation_token=token, yield_every=1)

        async def run():
            task = asyncio.create_task(
                generate_document(two_slot_template, [_entry(ids["front.png"], 50)], images.resolve, options=options)
            )
            await asyncio.sleep(0)
            token.cancel()
            return await task

        result = asyncio.run(run())
        assert result.cancelled
        assert result.placed_count < 50


class TestGenerationRunner:
    """Runner wiring, filenames and output."""

    @pytest.fixture
    def runner(self, images):
        return GenerationRunner(images, AssetStore(key=DOCUMENTS_STORAGE_KEY))

    def test_generate_both_when_called_then_fronts_and_backs(self, runner, two_slot_template, ids):
        fronts, backs = asyncio.run(
            runner.generate_both(two_slot_template, [_entry(ids["front.png"], 2)], ids["back.jpg"])
        )
        assert fronts.mode is GenerationMode.FRONTS
        assert backs.mode is GenerationMode.BACKS
        assert fronts.placed_count == backs.placed_count == 2
        assert not runner.busy

    def test_cancel_when_called_from_progress_then_run_cancelled(self, runner, two_slot_template, ids):
        result = asyncio.run(runner.generate_fronts(
            two_slot_template,
            [_entry(ids["front.png"], 4)],
            on_progress=lambda current, total: runner.cancel(),
        ))
        assert result.cancelled
        assert result.placed_count == 1

    def test_cancel_when_idle_then_no_op(self, runner):
        runner.cancel()
        assert not runner.busy

    @pytest.mark.parametrize("session, mode, expected", [
        ("My Deck", GenerationMode.FRONTS, "My Deck.pdf"),
        ("My Deck", GenerationMode.BACKS, "My Deck-backs.pdf"),
        ("", GenerationMode.FRONTS, "cards.pdf"),
        ("", GenerationMode.BACKS, "cards-backs.pdf"),
    ])
    def test_output_filename_when_mode_then_suffixes_backs(self, session, mode, expected):
        assert GenerationRunner.output_filename(session, mode) == expected

    def test_write_pdf_when_done_then_writes_file(self, runner, two_slot_template, ids, tmp_path):
        result = asyncio.run(runner.generate_fronts(two_slot_template, [_entry(ids["front.png"])]))
        path = runner.write_pdf(result, tmp_path / "out", "Deck")

        assert path.name == "Deck.pdf"
        assert path.read_bytes().startswith(b"%PDF")

    def test_write_pdf_when_cancelled_then_raises_error(self, runner, two_slot_template, ids, tmp_path):
        result = asyncio.run(runner.generate_fronts(
            two_slot_template,
            [_entry(ids["front.png"], 2)],
            on_progress=lambda current, total: runner.cancel(),
        ))
        with pytest.raises(ValueError):
            runner.write_pdf(result, tmp_path)
