"""
Module: assets.hashing

Purpose:
    Content hash used to deduplicate assets.

    The hash is a 32-bit rolling checksum (h = h * 31 + c) over the
    data URI text of a payload, rendered as signed hexadecimal. It is the
    same value older snapshots recorded under "hash", so stores written
    before and after this module agree on which assets are duplicates.

    Data URI text passed to AssetStore.add_asset() is hashed exactly as
    given. Raw bytes are hashed through their canonical data URI
    (lower-case MIME type, standard base64), so the same image added once
    as bytes and once as non-canonical URI text gets two different hashes.

    This is NOT collision resistant: two different payloads can share a
    hash and would then be treated as the same asset. Replacing it with a
    cryptographic digest changes dedup behaviour for existing snapshots
    and has to be done as a deliberate migration.

Key Functions:
    - rolling_hash(): Checksum of a text
    - payload_hash(): Checksum of an AssetPayload (via its data URI)
"""

from __future__ import annotations

from card_press.core.models.assets import AssetPayload

_MASK_32 = 0xFFFFFFFF
_SIGN_BIT = 0x80000000


def rolling_hash(text: str) -> str:
    """
    Compute the 32-bit rolling checksum of a text.

    Args:
        text: Input text (data URIs are plain ASCII)

    Returns:
        Signed hexadecimal string, e.g. "1f2e" or "-7a0c"

    Example:
        >>> rolling_hash("")
        '0'
        >>> rolling_hash("a")
        '61'
    """
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & _MASK_32

    if h & _SIGN_BIT:
        h -= 1 << 32
    if h < 0:
        return "-" + format(-h, "x")
    return format(h, "x")


def payload_hash(payload: AssetPayload) -> str:
    """Checksum of a payload's data URI form."""
    return rolling_hash(payload.to_data_uri())
