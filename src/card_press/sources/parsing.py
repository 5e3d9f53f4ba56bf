"""
Module: sources.parsing

Purpose:
    Parse plain-text card lists such as deck exports.

Key Functions:
    - parse_card_list(): Text -> ParsedCard list

Format:
    One card per line, optionally prefixed by a count:

        Mana Vault
        2 Counterspell
        3x Sol Ring

    Blank lines and lines starting with ``//`` or ``#`` are skipped. A line
    whose count is zero is dropped. Lines without a count request one copy.
"""

from __future__ import annotations

import re
from typing import List

from .base import ParsedCard

COMMENT_PREFIXES = ("//", "#")

_COUNTED_LINE = re.compile(r"^(\d+)\s*x?\s+(.+)$", re.IGNORECASE)


def parse_card_list(text: str) -> List[ParsedCard]:
    """
    Parse a card list.

    Example:
        >>> parse_card_list("2x Sol Ring\\n# sideboard\\nMana Vault")
        [ParsedCard(count=2, name='Sol Ring', id=None), ParsedCard(count=1, name='Mana Vault', id=None)]
    """
    cards: List[ParsedCard] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        match = _COUNTED_LINE.match(line)
        if match:
            count = int(match.group(1))
            name = match.group(2).strip()
            if name and count > 0:
                cards.append(ParsedCard(count=count, name=name))
        else:
            cards.append(ParsedCard(count=1, name=line))
    return cards
