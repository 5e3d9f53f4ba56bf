"""
Module: builder.images.decoder

Purpose:
    Turn a stored payload into a raster image the renderer can draw.
    Only PNG and JPEG are supported; anything else is reported as
    undrawable and the slot is left blank.

Key Classes:
    - CardImage: Verified raster ready for the canvas

Key Functions:
    - raster_format(): Declared MIME type -> "png" / "jpeg" / None
    - decode_card_image(): Payload -> CardImage or None

Dependencies:
    - PIL: Payload verification
    - reportlab: ImageReader for the canvas

Used By:
    - builder.controller: Per-slot image loading
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader

from card_press.core.models import AssetPayload

logger = logging.getLogger(__name__)

# Declared MIME type -> raster format
SUPPORTED_MIME_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/jpg": "jpeg",
}

# Pillow format name -> raster format
_PIL_FORMATS = {
    "PNG": "png",
    "JPEG": "jpeg",
}


@dataclass(frozen=True)
class CardImage:
    """
    A verified PNG or JPEG payload.

    Attributes:
        data: Encoded image bytes
        format: "png" or "jpeg"
        width: Width in pixels
        height: Height in pixels
    """

    data: bytes
    format: str
    width: int
    height: int

    def reader(self) -> ImageReader:
        """ReportLab reader over the encoded bytes."""
        return ImageReader(io.BytesIO(self.data))


def raster_format(mime_type: str) -> Optional[str]:
    """
    Map a declared MIME type to a raster format.

    Example:
        >>> raster_format("image/jpg")
        'jpeg'
        >>> raster_format("image/webp") is None
        True
    """
    return SUPPORTED_MIME_TYPES.get(mime_type.strip().lower())


def decode_card_image(payload: AssetPayload) -> Optional[CardImage]:
    """
    Verify a payload and wrap it for drawing.

    The format is taken from the declared MIME type. The bytes must decode
    with Pillow as that same format; otherwise the payload is rejected.

    Args:
        payload: Stored asset payload

    Returns:
        CardImage, or None if the payload cannot be drawn
    """
    fmt = raster_format(payload.mime_type)
    if fmt is None:
        logger.debug(f"Unsupported image type {payload.mime_type!r}")
        return None

    try:
        with Image.open(io.BytesIO(payload.data)) as img:
            actual = _PIL_FORMATS.get(img.format or "")
            width, height = img.size
            img.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        logger.debug(f"Undecodable {fmt} payload: {e}")
        return None

    if actual != fmt:
        logger.debug(f"Payload declared as {fmt} but decodes as {actual or 'unknown'}")
        return None

    return CardImage(data=payload.data, format=fmt, width=width, height=height)
