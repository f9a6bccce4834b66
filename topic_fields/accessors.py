"""
Accessor Binder

Typed get/set access to one custom field on any topic-like entity.

The entity is never modified beyond its ``custom_fields`` mapping: instead of
adding methods to the host's topic class, callers wrap the entity with a
BoundField (one field) or EntityFields (any registered field).

Absent values are represented as None. ``set(entity, None)`` removes the key,
so an absent field and a field holding "" or 0 stay distinguishable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from topic_fields.fields import FieldDefinition, FieldRegistry


class CustomFieldEntity(Protocol):
    """Anything with an identifier and a mutable custom-fields mapping."""

    id: int
    custom_fields: dict[str, Any]


class FieldAccessor:
    """
    Getter and setter for a single registered field.

    No type checking is performed on ``set``: callers must pass a value of the
    declared type (or None).
    """

    def __init__(self, definition: FieldDefinition) -> None:
        self.definition = definition

    @property
    def name(self) -> str:
        return self.definition.name

    def get(self, entity: CustomFieldEntity) -> Any:
        """Return the stored value, or None when the field is unset."""
        return entity.custom_fields.get(self.name)

    def set(self, entity: CustomFieldEntity, value: Any) -> None:
        if value is None:
            entity.custom_fields.pop(self.name, None)
        else:
            entity.custom_fields[self.name] = value

    def bind(self, entity: CustomFieldEntity) -> BoundField:
        return BoundField(entity, self)


class BoundField:
    """An entity paired with one field accessor."""

    def __init__(self, entity: CustomFieldEntity, accessor: FieldAccessor) -> None:
        self.entity = entity
        self.accessor = accessor

    @property
    def value(self) -> Any:
        return self.accessor.get(self.entity)

    @value.setter
    def value(self, value: Any) -> None:
        self.accessor.set(self.entity, value)

    @property
    def is_absent(self) -> bool:
        return self.accessor.name not in self.entity.custom_fields

    def __repr__(self) -> str:
        return f"BoundField(entity_id={self.entity.id!r}, name={self.accessor.name!r}, value={self.value!r})"


class EntityFields:
    """Wrapper exposing every registered field of a registry on one entity."""

    def __init__(self, entity: CustomFieldEntity, registry: FieldRegistry) -> None:
        self.entity = entity
        self.registry = registry

    def _accessor(self, name: str) -> FieldAccessor:
        return FieldAccessor(self.registry.require(name))

    def get(self, name: str) -> Any:
        return self._accessor(name).get(self.entity)

    def set(self, name: str, value: Any) -> None:
        self._accessor(name).set(self.entity, value)
