"""
Lifecycle Synchronizer

Keeps the configured custom field in step with topic creation and revision.

    on_topic_created   — listener for ``topic.created``: copy the value from the
                         creation options onto the topic, then persist it.
    on_topic_revising  — field handler for the revision pipeline: log the
                         change and apply the new value.

Only the revision path turns "" into an absent value. Creation stores
whatever the options carry, "" included.

Neither method catches errors: failures belong to the pipeline that called
them, which owns rollback.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from topic_fields.accessors import CustomFieldEntity, FieldAccessor
    from topic_fields.config import FieldConfig
    from topic_fields.revisor import RevisionContext
    from topic_fields.store import CustomFieldStore

logger = logging.getLogger(__name__)


class LifecycleSynchronizer:
    def __init__(self, config: FieldConfig, accessor: FieldAccessor, store: CustomFieldStore) -> None:
        self.config = config
        self.accessor = accessor
        self.store = store

    def on_topic_created(self, topic: CustomFieldEntity, opts: dict[str, Any], user: Any = None) -> None:
        if not self.config.enabled:
            return
        self.accessor.set(topic, (opts or {}).get(self.config.name))
        self.store.save(topic)
        logger.debug("Topic %s created with %s=%r", topic.id, self.config.name, self.accessor.get(topic))

    def on_topic_revising(self, tc: RevisionContext, value: Any) -> None:
        if not self.config.enabled:
            return
        new_value = value if _present(value) else None
        tc.record_change(self.config.name, self.accessor.get(tc.topic), new_value)
        self.accessor.set(tc.topic, new_value)


def _present(value: Any) -> bool:
    # Only missing and blank strings count as absent. False, 0 and empty
    # collections are real values for boolean, integer and json fields.
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True
