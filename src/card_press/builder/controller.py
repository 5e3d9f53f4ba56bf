"""
Module: builder.controller

Purpose:
    Orchestrate a complete card sheet generation.
    Expand → Paginate → Resolve background → Place cards → Finalize

Key Functions:
    - generate_document(): Coroutine producing one PDF (fronts or backs)
    - generate_document_sync(): Blocking wrapper around generate_document()

Key Classes:
    - GenerationResult: Outcome of a run (PDF bytes or cancellation)
    - GenerationStatus: DONE / CANCELLED
    - GenerationRunner: Keeps at most one generation active per owner

States:
    Idle → Expanding → Paginating → Rendering(page, slot)
         → Done | Cancelled | Failed
    ValidationError moves straight to Failed before anything is drawn.
    Cancelled runs never return partial output.

Dependencies:
    - builder.layout: Expansion and pagination
    - builder.images: Payload verification
    - builder.output: Rendering and background composition

Used By:
    - Host applications (UI, scripts)
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from card_press.assets import AssetStore
from card_press.core.models import AssetPayload, CardEntry, ExpandedCard, Template

from .cancellation import CancellationToken
from .config import GenerationMode, GenerationOptions, ProgressCallback
from .images import CardImage, decode_card_image
from .layout import LayoutResult, expand_cards, paginate
from .output import SheetCanvas, compose_over_background, open_background

logger = logging.getLogger(__name__)

AssetResolver = Callable[[str], Optional[AssetPayload]]


class GenerationStatus(str, Enum):
    DONE = "done"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of one generation run (immutable).

    Attributes:
        status: DONE, or CANCELLED when the token fired mid-run
        data: PDF bytes for DONE; always None for CANCELLED
        mode: Which face was generated
        page_count: Pages in the layout
        placed_count: Cards actually drawn
        skipped_count: Slots left blank (no back, missing or bad image)
        total_cards: Length of the expanded card sequence
        warnings: Non-fatal problems (e.g. unusable background)

    Example:
        >>> result = generate_document_sync(template, cards, store.resolve)
        >>> if not result.cancelled:
        ...     Path("cards.pdf").write_bytes(result.data)
    """

    status: GenerationStatus
    data: Optional[bytes]
    mode: GenerationMode
    page_count: int
    placed_count: int
    skipped_count: int
    total_cards: int
    warnings: tuple[str, ...] = ()

    @property
    def cancelled(self) -> bool:
        return self.status is GenerationStatus.CANCELLED


async def generate_document(
    template: Template,
    cards: Sequence[CardEntry],
    resolve_asset: AssetResolver,
    resolve_background: Optional[AssetResolver] = None,
    options: Optional[GenerationOptions] = None,
) -> GenerationResult:
    """
    Render a card list onto a template.

    Pipeline:
    1. Expand entries by count
    2. Paginate onto the template's slots
    3. Load the background document (first page is copied per page)
    4. Place each card, reporting progress and honouring cancellation
    5. Serialize

    Slots are left blank, never failing the run, when: no back image
    exists in BACKS mode, the asset cannot be resolved, the image type is
    not PNG/JPEG, or the payload cannot be decoded or drawn.

    Args:
        template: Page layout
        cards: Card list in placement order
        resolve_asset: Image id -> payload (or None)
        resolve_background: Document id -> payload (or None)
        options: Mode, default back, progress, cancellation

    Returns:
        GenerationResult (DONE with PDF bytes, or CANCELLED)

    Raises:
        EmptyInputError: If the card list expands to nothing
        NoSlotsError: If the template has no slots
    """
    options = options or GenerationOptions()
    start_time = time.perf_counter()
    warnings: List[str] = []

    expanded = expand_cards(cards)
    layout = paginate(expanded, template)

    logger.info(
        f"Generating {options.mode.value} for {layout.total_cards} card(s) "
        f"on {layout.page_count} page(s) using template {template.name!r}"
    )

    background = None
    if template.background_document_id:
        payload = _resolve(resolve_background, template.background_document_id)
        if payload is None:
            warnings.append(f"Background document {template.background_document_id} not found")
        else:
            background = open_background(payload)
            if background is None:
                warnings.append("Background document could not be read")

    try:
        sheet = SheetCanvas(template.page_dimension, template.card_size)
        placed = 0
        skipped = 0
        processed = 0

        for page in layout.pages:
            for placement in page.placements:
                if options.is_cancelled:
                    return _cancelled(options, layout, placed, skipped, warnings)

                image = _load_card_image(placement.card, resolve_asset, options)
                if image is not None and sheet.draw_card(placement.slot, image):
                    placed += 1
                    if options.on_progress is not None:
                        options.on_progress(placement.global_index + 1, layout.total_cards)
                else:
                    skipped += 1

                processed += 1
                if processed % options.yield_every == 0:
                    await asyncio.sleep(0)
            sheet.end_page()

        if options.is_cancelled:
            return _cancelled(options, layout, placed, skipped, warnings)

        data = sheet.finish()
        if background is not None:
            data = compose_over_background(data, background)
    finally:
        if background is not None:
            background.close()

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Generated {layout.page_count} page(s): {placed} placed, {skipped} skipped "
        f"in {elapsed:.2f}s"
    )
    return GenerationResult(
        status=GenerationStatus.DONE,
        data=data,
        mode=options.mode,
        page_count=layout.page_count,
        placed_count=placed,
        skipped_count=skipped,
        total_cards=layout.total_cards,
        warnings=tuple(warnings),
    )


def generate_document_sync(
    template: Template,
    cards: Sequence[CardEntry],
    resolve_asset: AssetResolver,
    resolve_background: Optional[AssetResolver] = None,
    options: Optional[GenerationOptions] = None,
) -> GenerationResult:
    """Run generate_document() to completion on a new event loop."""
    return asyncio.run(
        generate_document(template, cards, resolve_asset, resolve_background, options)
    )


def _asset_id_for(card: ExpandedCard, options: GenerationOptions) -> Optional[str]:
    """Image id to draw for a card, or None when BACKS mode has no back."""
    if options.mode is GenerationMode.BACKS:
        return card.back_asset_id or options.default_back_asset_id or None
    return card.front_asset_id


def _resolve(resolver: Optional[AssetResolver], asset_id: str) -> Optional[AssetPayload]:
    """Call a resolver, treating resolver failures as a missing asset."""
    if resolver is None:
        return None
    try:
        return resolver(asset_id)
    except Exception as e:
        logger.warning(f"Resolver failed for {asset_id}: {e}")
        return None


def _load_card_image(
    card: ExpandedCard,
    resolve_asset: AssetResolver,
    options: GenerationOptions,
) -> Optional[CardImage]:
    asset_id = _asset_id_for(card, options)
    if asset_id is None:
        return None

    payload = _resolve(resolve_asset, asset_id)
    if payload is None:
        logger.debug(f"Asset {asset_id} not found, leaving slot blank")
        return None
    return decode_card_image(payload)


def _cancelled(
    options: GenerationOptions,
    layout: LayoutResult,
    placed: int,
    skipped: int,
    warnings: List[str],
) -> GenerationResult:
    logger.info(f"Generation cancelled after {placed + skipped}/{layout.total_cards} card(s)")
    return GenerationResult(
        status=GenerationStatus.CANCELLED,
        data=None,
        mode=options.mode,
        page_count=layout.page_count,
        placed_count=placed,
        skipped_count=skipped,
        total_cards=layout.total_cards,
        warnings=tuple(warnings),
    )


class GenerationRunner:
    """
    Runs generations against a pair of asset stores.

    Starting a run cancels the previous one, so at most one generation
    per runner is active at a time. Each run gets a fresh token.

    Attributes:
        images: Store holding card fronts and backs
        documents: Store holding background documents

    Example:
        >>> runner = GenerationRunner(images, documents)
        >>> fronts, backs = asyncio.run(runner.generate_both(template, cards, "back-id"))
        >>> runner.write_pdf(fronts, Path("out"), "My Deck")
        PosixPath('out/My Deck.pdf')
    """

    def __init__(self, images: AssetStore, documents: AssetStore) -> None:
        self.images = images
        self.documents = documents
        self._active: Optional[CancellationToken] = None

    @property
    def busy(self) -> bool:
        return self._active is not None

    def cancel(self) -> None:
        """Cancel the active run, if any."""
        if self._active is not None:
            self._active.cancel()

    async def generate(
        self,
        template: Template,
        cards: Sequence[CardEntry],
        mode: GenerationMode = GenerationMode.FRONTS,
        default_back_asset_id: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> GenerationResult:
        """Start a run, cancelling any run already in flight."""
        self.cancel()
        token = CancellationToken()
        self._active = token

        options = GenerationOptions(
            mode=mode,
            default_back_asset_id=default_back_asset_id,
            on_progress=on_progress,
            cancellation_token=token,
        )
        try:
            return await generate_document(
                template,
                cards,
                self.images.resolve,
                self.documents.resolve,
                options,
            )
        finally:
            if self._active is token:
                self._active = None

    async def generate_fronts(
        self,
        template: Template,
        cards: Sequence[CardEntry],
        on_progress: Optional[ProgressCallback] = None,
    ) -> GenerationResult:
        return await self.generate(template, cards, GenerationMode.FRONTS, on_progress=on_progress)

    async def generate_backs(
        self,
        template: Template,
        cards: Sequence[CardEntry],
        default_back_asset_id: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> GenerationResult:
        return await self.generate(
            template,
            cards,
            GenerationMode.BACKS,
            default_back_asset_id=default_back_asset_id,
            on_progress=on_progress,
        )

    async def generate_both(
        self,
        template: Template,
        cards: Sequence[CardEntry],
        default_back_asset_id: Optional[str] = None,
    ) -> tuple[GenerationResult, GenerationResult]:
        """Fronts, then backs, as two independent documents."""
        fronts = await self.generate_fronts(template, cards)
        backs = await self.generate_backs(template, cards, default_back_asset_id)
        return fronts, backs

    @staticmethod
    def output_filename(session_name: str, mode: GenerationMode) -> str:
        """
        Download name for a result.

        Example:
            >>> GenerationRunner.output_filename("", GenerationMode.BACKS)
            'cards-backs.pdf'
        """
        base = session_name or "cards"
        if mode is GenerationMode.BACKS:
            return f"{base}-backs.pdf"
        return f"{base}.pdf"

    def write_pdf(self, result: GenerationResult, output_dir: Path, session_name: str = "") -> Path:
        """
        Write a finished result to ``output_dir``.

        Raises:
            ValueError: If the result was cancelled
        """
        if result.data is None:
            raise ValueError("Cannot write a cancelled generation")
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / self.output_filename(session_name, result.mode)
        path.write_bytes(result.data)
        logger.info(f"Wrote {path}")
        return path
