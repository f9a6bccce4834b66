"""
Custom Field Storage

CustomFieldStore: persistence contract for the topic custom-fields map.
InMemoryCustomFieldStore: dict-backed store for tests and single-process use.
SQLAlchemyCustomFieldStore: rows in the ``topic_custom_fields`` table, one per
(topic_id, name), values kept as text and cast back through FieldType.

``fetch`` is the batch operation behind list preloading: one call covers
every topic of a list.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, select

from topic_fields.fields import FieldType
from topic_fields.models import TopicCustomField

if TYPE_CHECKING:
    from sqlalchemy.orm import sessionmaker

    from topic_fields.accessors import CustomFieldEntity
    from topic_fields.fields import FieldRegistry

logger = logging.getLogger(__name__)


class CustomFieldStore(ABC):
    """Persistence for topic custom fields."""

    @abstractmethod
    def save(self, topic: CustomFieldEntity) -> None:
        """Persist the topic's current custom-fields map, replacing what was stored."""

    @abstractmethod
    def fetch(self, topic_ids: Iterable[int], names: Iterable[str] | None = None) -> dict[int, dict[str, Any]]:
        """
        Batch-load custom fields.

        Args:
            topic_ids: Topics to load.
            names:     Field names to load; None loads every stored field.

        Returns:
            Mapping of topic id to {name: value}. Topics with nothing stored
            are omitted.
        """

    def load(self, topic: CustomFieldEntity) -> CustomFieldEntity:
        """Replace ``topic.custom_fields`` with the stored values."""
        topic.custom_fields = self.fetch([topic.id]).get(topic.id, {})
        return topic


class InMemoryCustomFieldStore(CustomFieldStore):
    def __init__(self) -> None:
        self._rows: dict[int, dict[str, Any]] = {}
        self.save_calls = 0
        self.fetch_calls = 0

    def save(self, topic: CustomFieldEntity) -> None:
        self.save_calls += 1
        self._rows[topic.id] = copy.deepcopy(topic.custom_fields)

    def fetch(self, topic_ids: Iterable[int], names: Iterable[str] | None = None) -> dict[int, dict[str, Any]]:
        self.fetch_calls += 1
        wanted = None if names is None else set(names)
        result: dict[int, dict[str, Any]] = {}
        for topic_id in topic_ids:
            stored = self._rows.get(topic_id)
            if not stored:
                continue
            values = {k: copy.deepcopy(v) for k, v in stored.items() if wanted is None or k in wanted}
            if values:
                result[topic_id] = values
        return result


class SQLAlchemyCustomFieldStore(CustomFieldStore):
    """
    Store backed by the ``topic_custom_fields`` table.

    Registered fields are dumped and cast according to their FieldType, so an
    integer field saved as "42" is read back as 42. Unregistered names are
    kept as plain strings.
    """

    def __init__(self, session_factory: sessionmaker, registry: FieldRegistry) -> None:
        self.session_factory = session_factory
        self.registry = registry

    def _type_of(self, name: str) -> FieldType:
        definition = self.registry.get(name)
        return definition.value_type if definition is not None else FieldType.STRING

    def _cast(self, row: TopicCustomField) -> Any:
        try:
            return self._type_of(row.name).cast(row.value)
        except (TypeError, ValueError) as exc:
            logger.warning("Unreadable custom field %s on topic %s, treating as null: %s", row.name, row.topic_id, exc)
            return None

    def save(self, topic: CustomFieldEntity) -> None:
        with self.session_factory() as db:
            try:
                db.execute(delete(TopicCustomField).where(TopicCustomField.topic_id == topic.id))
                for name, value in topic.custom_fields.items():
                    if value is None:
                        continue
                    db.add(TopicCustomField(topic_id=topic.id, name=name, value=self._type_of(name).dump(value)))
                db.commit()
            except Exception as e:
                db.rollback()
                logger.error("Error saving custom fields for topic %s: %s", topic.id, e)
                raise
        logger.debug("Saved %d custom fields for topic %s", len(topic.custom_fields), topic.id)

    def fetch(self, topic_ids: Iterable[int], names: Iterable[str] | None = None) -> dict[int, dict[str, Any]]:
        ids = list(dict.fromkeys(topic_ids))
        wanted = None if names is None else list(names)
        if not ids or wanted == []:
            return {}

        query = select(TopicCustomField).where(TopicCustomField.topic_id.in_(ids))
        if wanted is not None:
            query = query.where(TopicCustomField.name.in_(wanted))

        result: dict[int, dict[str, Any]] = {}
        with self.session_factory() as db:
            for row in db.execute(query).scalars():
                result.setdefault(row.topic_id, {})[row.name] = self._cast(row)
        return result
