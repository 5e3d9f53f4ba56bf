"""
Module: core.utils.data_uri

Purpose:
    Convert between binary payloads and self-describing ``data:`` URIs.
    Payloads are held as bytes with an explicit MIME type everywhere in
    the package; the text form only appears in persisted snapshots.

Key Functions:
    - encode_data_uri(): bytes + MIME -> "data:<mime>;base64,..."
    - decode_data_uri(): "data:..." -> (bytes, MIME)
    - sniff_mime_type(): Guess a MIME type from leading magic bytes

Dependencies:
    - base64 (std)
    - PIL: Fallback format detection for less common images

Used By:
    - core.models.assets: AssetPayload text form
    - assets.store: Snapshot serialization, add_asset() input
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from typing import Tuple

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

# Leading bytes -> MIME type for the formats the engine cares about
_MAGIC_NUMBERS = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"%PDF-", "application/pdf"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


class DataUriError(ValueError):
    """Text is not a base64 data URI."""
    pass


def encode_data_uri(data: bytes, mime_type: str) -> str:
    """
    Encode bytes as a base64 data URI.

    Example:
        >>> encode_data_uri(b"hi", "text/plain")
        'data:text/plain;base64,aGk='
    """
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def decode_data_uri(uri: str) -> Tuple[bytes, str]:
    """
    Decode a base64 data URI.

    Args:
        uri: Text of the form ``data:<mime>[;params];base64,<payload>``

    Returns:
        Tuple of (payload bytes, MIME type)

    Raises:
        DataUriError: If the text is not a base64 data URI
    """
    if not uri.startswith("data:"):
        raise DataUriError("Not a data URI")
    header, sep, payload = uri.partition(",")
    if not sep:
        raise DataUriError("Invalid data URI: missing payload separator")

    params = header[len("data:"):].split(";")
    mime_type = params[0].strip().lower() or DEFAULT_MIME_TYPE
    if "base64" not in (p.strip().lower() for p in params[1:]):
        raise DataUriError(f"Only base64 data URIs are supported ({mime_type})")

    try:
        data = base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as e:
        raise DataUriError(f"Invalid base64 payload: {e}") from e
    return data, mime_type


def sniff_mime_type(data: bytes) -> str:
    """
    Guess the MIME type of a payload.

    Checks magic numbers first, then asks Pillow. Unknown payloads are
    reported as application/octet-stream.
    """
    for magic, mime_type in _MAGIC_NUMBERS:
        if data.startswith(magic):
            return mime_type

    try:
        with Image.open(io.BytesIO(data)) as img:
            mime_type = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError):
        mime_type = None

    if mime_type is None:
        logger.debug("Could not identify payload type, using octet-stream")
        return DEFAULT_MIME_TYPE
    return mime_type
