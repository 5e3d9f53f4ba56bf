"""
Module: builder.images

Purpose:
    Payload verification and raster access for the renderer.
"""

from .decoder import SUPPORTED_MIME_TYPES, CardImage, decode_card_image, raster_format

__all__ = [
    "SUPPORTED_MIME_TYPES",
    "CardImage",
    "decode_card_image",
    "raster_format",
]
