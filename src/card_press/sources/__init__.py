"""
Module: sources

Purpose:
    Card import adapters: parse a pasted list, fetch an image per card.

Key Classes:
    - CardSource: Adapter contract
    - LocalStoreSource: Matches names against an AssetStore

Key Functions:
    - register_source() / get_source() / all_sources(): Adapter registry
    - parse_card_list(): Shared "2x Name" list parser
"""

from .base import CardSource, FetchResult, ParsedCard
from .local import NOT_FOUND_ERROR, LocalStoreSource
from .parsing import parse_card_list
from .registry import all_sources, get_source, register_source, unregister_source

__all__ = [
    "CardSource",
    "FetchResult",
    "ParsedCard",
    "LocalStoreSource",
    "NOT_FOUND_ERROR",
    "parse_card_list",
    "register_source",
    "get_source",
    "all_sources",
    "unregister_source",
]
