"""
List preload cache.

Filled in one batch before a topic list is serialized and read once per list
item afterwards. A topic that was never preloaded reads as absent (None) and
logs a warning; the render carries on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

logger = logging.getLogger(__name__)


class ListPreloadCache:
    def __init__(self) -> None:
        self._entries: dict[int, dict[str, Any]] = {}
        self._warned: set[int] = set()

    def populate(self, topic_ids: Iterable[int], values: dict[int, dict[str, Any]]) -> None:
        """Add an entry for every id, empty when the batch fetch returned nothing for it."""
        for topic_id in topic_ids:
            self._entries[topic_id] = dict(values.get(topic_id, {}))

    def covers(self, topic_id: int) -> bool:
        return topic_id in self._entries

    @property
    def preloaded_ids(self) -> list[int]:
        return list(self._entries)

    def lookup(self, topic_id: int, name: str) -> Any:
        entry = self._entries.get(topic_id)
        if entry is None:
            if topic_id not in self._warned:
                self._warned.add(topic_id)
                logger.warning("Topic %s was not preloaded; serializing %s as null", topic_id, name)
            return None
        return entry.get(name)

    def discard(self) -> None:
        self._entries.clear()
        self._warned.clear()

    def __len__(self) -> int:
        return len(self._entries)
