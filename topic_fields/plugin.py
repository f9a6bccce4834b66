"""
Topic Custom Field Plugin

Attaches one configured custom field to topics:

  1. register the field and its type
  2. bind a getter/setter accessor
  3. keep the field in step with topic creation and revision
  4. expose it in the topic view, preload it for topic lists and expose it
     in each topic list item

When the plugin is disabled the field stays registered (so stored values keep
their type), but the lifecycle handlers do nothing and both serializers omit
the field.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from topic_fields.accessors import FieldAccessor
from topic_fields.base import PluginBase, PluginMeta
from topic_fields.hooks import HOOK_TOPIC_CREATED, HOOK_TOPIC_REVISING, VIEW_TOPIC, VIEW_TOPIC_LIST_ITEM
from topic_fields.lifecycle import LifecycleSynchronizer

if TYPE_CHECKING:
    from topic_fields.config import FieldConfig
    from topic_fields.registry import PluginRegistry
    from topic_fields.revisor import TopicRevisor
    from topic_fields.store import CustomFieldStore

logger = logging.getLogger(__name__)

PLUGIN_NAME = "topic_custom_fields"

_META = PluginMeta(
    name=PLUGIN_NAME,
    version="1.0.0",
    description=(
        "Adds one typed custom field to topics: set on creation, tracked on edit, "
        "serialized in the topic view and the preloaded topic list"
    ),
    hooks=[HOOK_TOPIC_CREATED, HOOK_TOPIC_REVISING],
    config_schema={
        "enabled": {"type": "boolean", "default": True},
        "field_name": {"type": "string", "default": "topic_custom_field"},
        "field_type": {"type": "string", "enum": ["string", "integer", "boolean", "json"], "default": "string"},
    },
)


class TopicCustomFieldPlugin(PluginBase):
    def __init__(self, field_config: FieldConfig, revisor: TopicRevisor, store: CustomFieldStore) -> None:
        self.field_config = field_config
        self.revisor = revisor
        self.store = store
        self._enabled = field_config.enabled
        self.accessor: FieldAccessor | None = None
        self.synchronizer: LifecycleSynchronizer | None = None

    @property
    def meta(self) -> PluginMeta:
        return _META

    def on_load(self, registry: PluginRegistry, config: dict[str, Any]) -> None:
        self._config = config
        name = self.field_config.name

        # Step 1: field type
        registry.fields.register(name, self.field_config.value_type)

        # Step 2: accessors
        self.accessor = FieldAccessor(registry.fields.require(name))
        self.synchronizer = LifecycleSynchronizer(self.field_config, self.accessor, self.store)

        # Step 3: creation and revision
        registry.on(HOOK_TOPIC_CREATED, self.synchronizer.on_topic_created)
        self.revisor.track_topic_field(name, self.synchronizer.on_topic_revising)

        # Step 4: serialization
        accessor = self.accessor
        registry.add_to_serializer(VIEW_TOPIC, name, accessor.get, include_condition=self._is_enabled)
        registry.add_preloaded_topic_list_custom_field(name)
        registry.add_to_serializer(
            VIEW_TOPIC_LIST_ITEM,
            name,
            lambda item: item.preloaded_custom_field(name),
            include_condition=self._is_enabled,
        )

        logger.debug(
            "TopicCustomFieldPlugin loaded (field=%s, type=%s, enabled=%s)",
            name,
            self.field_config.value_type.value,
            self._enabled,
        )

    def _is_enabled(self) -> bool:
        return self._enabled

