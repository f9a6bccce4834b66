"""
Topic Serializers

TopicViewSerializer renders a single topic. Serializer fields registered for
the ``topic_view`` view are computed directly from the topic.

TopicListSerializer renders a list in two passes. The preload pass loads the
preloaded custom fields of every topic in a single store fetch; the item pass
builds each entry from that cache, never from the store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from topic_fields.hooks import (
    HOOK_TOPIC_LIST_ITEM_SERIALIZE,
    HOOK_TOPIC_LIST_PRELOAD,
    HOOK_TOPIC_VIEW_SERIALIZE,
    VIEW_TOPIC,
    VIEW_TOPIC_LIST_ITEM,
)
from topic_fields.preload import ListPreloadCache

if TYPE_CHECKING:
    from topic_fields.accessors import CustomFieldEntity
    from topic_fields.registry import PluginRegistry
    from topic_fields.store import CustomFieldStore

logger = logging.getLogger(__name__)


class TopicBase(BaseModel):
    id: int = Field(..., title="Topic ID", description="The unique identifier for the topic.")
    title: Optional[str] = Field(None, title="Topic Title", description="The title of the topic.")

    model_config = ConfigDict(from_attributes=True)


class TopicListItem:
    """A topic as seen by list serializer fields: custom fields come from the preload cache."""

    def __init__(self, topic: CustomFieldEntity, cache: ListPreloadCache) -> None:
        self.topic = topic
        self.cache = cache

    @property
    def id(self) -> int:
        return self.topic.id

    def preloaded_custom_field(self, name: str) -> Any:
        return self.cache.lookup(self.topic.id, name)


def _apply_fields(registry: PluginRegistry, view: str, obj: Any, data: dict[str, Any]) -> dict[str, Any]:
    for serializer_field in registry.serializer_fields(view):
        if serializer_field.included():
            data[serializer_field.name] = serializer_field.producer(obj)
    return data


class TopicViewSerializer:
    def __init__(self, registry: PluginRegistry) -> None:
        self.registry = registry

    def serialize(self, topic: CustomFieldEntity) -> dict[str, Any]:
        data = TopicBase.model_validate(topic).model_dump()
        _apply_fields(self.registry, VIEW_TOPIC, topic, data)
        self.registry.fire_hook(HOOK_TOPIC_VIEW_SERIALIZE, topic, data)
        return data


class TopicListSerializer:
    def __init__(self, registry: PluginRegistry, store: CustomFieldStore) -> None:
        self.registry = registry
        self.store = store

    def preload(self, topics: list[CustomFieldEntity]) -> ListPreloadCache:
        """Batch-load every preloaded custom field for ``topics``."""
        cache = ListPreloadCache()
        ids = [topic.id for topic in topics]
        names = self.registry.preloaded_fields()
        values = self.store.fetch(ids, names) if ids and names else {}
        cache.populate(ids, values)
        self.registry.fire_hook(HOOK_TOPIC_LIST_PRELOAD, topics, cache)
        logger.debug("Preloaded %s for %d topics", names, len(ids))
        return cache

    def serialize_item(self, topic: CustomFieldEntity, cache: ListPreloadCache) -> dict[str, Any]:
        item = TopicListItem(topic, cache)
        data = TopicBase.model_validate(topic).model_dump()
        _apply_fields(self.registry, VIEW_TOPIC_LIST_ITEM, item, data)
        self.registry.fire_hook(HOOK_TOPIC_LIST_ITEM_SERIALIZE, item, data)
        return data

    def serialize(self, topics: Iterable[CustomFieldEntity]) -> list[dict[str, Any]]:
        topics = list(topics)
        cache = self.preload(topics)
        try:
            return [self.serialize_item(topic, cache) for topic in topics]
        finally:
            cache.discard()
