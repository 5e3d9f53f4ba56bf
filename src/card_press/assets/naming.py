"""Unique display names for stored assets."""

from __future__ import annotations

import re
from typing import AbstractSet

# Stem and optional trailing extension ("card.png" -> "card", ".png")
_NAME_PATTERN = re.compile(r"^(.+?)(\.\w+)?$")


def unique_name(base_name: str, existing_names: AbstractSet[str]) -> str:
    """
    Return ``base_name`` or the first free "stem (n).ext" variant.

    Numbering starts at 2, so the second "card.png" becomes
    "card (2).png", the third "card (3).png".

    Example:
        >>> unique_name("card.png", {"card.png"})
        'card (2).png'
        >>> unique_name("card.png", {"card.png", "card (2).png"})
        'card (3).png'
    """
    if base_name not in existing_names:
        return base_name

    match = _NAME_PATTERN.match(base_name)
    stem = match.group(1) if match else base_name
    ext = (match.group(2) or "") if match else ""

    counter = 2
    candidate = f"{stem} ({counter}){ext}"
    while candidate in existing_names:
        counter += 1
        candidate = f"{stem} ({counter}){ext}"
    return candidate
