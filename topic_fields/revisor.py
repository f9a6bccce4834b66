"""
Topic Revision Pipeline

RevisionContext: the edit transaction handed to field handlers. It carries the
topic being revised and the change log of (old, new) pairs.

TopicRevisor: applies a set of submitted field values to a topic. Each tracked
field present in the submission has its handler called inside one
transaction: if any handler raises, every custom field on the topic is
restored to its pre-revision state and the error propagates. Nothing is
persisted until all handlers succeed.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from topic_fields.hooks import HOOK_TOPIC_REVISING

if TYPE_CHECKING:
    from topic_fields.accessors import CustomFieldEntity
    from topic_fields.registry import PluginRegistry
    from topic_fields.store import CustomFieldStore

logger = logging.getLogger(__name__)

FieldHandler = Callable[["RevisionContext", Any], None]


@dataclass(frozen=True)
class ChangeRecord:
    old: Any
    new: Any


@dataclass
class RevisionContext:
    topic: CustomFieldEntity
    user: Any = None
    changes: dict[str, ChangeRecord] = field(default_factory=dict)

    def record_change(self, name: str, old: Any, new: Any) -> None:
        """Record an (old, new) pair for ``name``; unchanged values are not recorded."""
        # 1 == True in Python; a bool replacing an int is still a change
        if type(old) is type(new) and old == new:
            return
        self.changes[name] = ChangeRecord(old=old, new=new)

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)


class TopicRevisor:
    def __init__(self, registry: PluginRegistry, store: CustomFieldStore) -> None:
        self.registry = registry
        self.store = store
        self._tracked: dict[str, FieldHandler] = {}

    def track_topic_field(self, name: str, handler: FieldHandler) -> None:
        """Call ``handler(tc, value)`` whenever ``name`` is submitted in a revision."""
        self._tracked[name] = handler

    def tracked_fields(self) -> list[str]:
        return list(self._tracked)

    def revise(self, topic: CustomFieldEntity, fields: dict[str, Any], user: Any = None) -> RevisionContext:
        tc = RevisionContext(topic=topic, user=user)
        snapshot = copy.deepcopy(topic.custom_fields)
        try:
            self.registry.fire_hook(HOOK_TOPIC_REVISING, tc, fields)
            for name, handler in self._tracked.items():
                if name in fields:
                    handler(tc, fields[name])
            self.store.save(topic)
        except Exception:
            topic.custom_fields = snapshot
            logger.warning("Revision of topic %s rolled back", topic.id)
            raise

        logger.info("Topic %s revised (%d field changes)", topic.id, len(tc.changes))
        return tc
