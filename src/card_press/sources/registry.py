"""Source registry: adapters by id, in registration order."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .base import CardSource

logger = logging.getLogger(__name__)

_SOURCES: Dict[str, CardSource] = {}


def register_source(source: CardSource) -> None:
    """Register ``source``, replacing any adapter with the same id."""
    if not source.id:
        raise ValueError("CardSource.id must be set")
    if source.id in _SOURCES:
        logger.debug(f"Replacing card source {source.id!r}")
    _SOURCES[source.id] = source


def get_source(source_id: str) -> Optional[CardSource]:
    return _SOURCES.get(source_id)


def all_sources() -> List[CardSource]:
    return list(_SOURCES.values())


def unregister_source(source_id: str) -> None:
    _SOURCES.pop(source_id, None)
