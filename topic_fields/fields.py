"""
Field Registrar

FieldType: the four value kinds a topic custom field may declare.
FieldDefinition: immutable (name, type) pair.
FieldRegistry: process-wide set of definitions, populated once at startup and
frozen before the first request is served.

Custom field values are kept as text by the storage layer; FieldType.dump and
FieldType.cast convert between that text and the declared Python type.
"""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any

from topic_fields.exceptions import (
    FieldConfigurationError,
    FieldConflictError,
    FieldNotRegisteredError,
    RegistryFrozenError,
    UnknownFieldTypeError,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"t", "true", "1"}


class FieldType(str, enum.Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    JSON = "json"

    @classmethod
    def parse(cls, value: Any, field: str | None = None) -> FieldType:
        """Return the FieldType named by ``value`` (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnknownFieldTypeError(value, field=field)

    def dump(self, value: Any) -> str | None:
        """Serialise a typed value to its stored text form."""
        if value is None:
            return None
        if self is FieldType.JSON:
            return json.dumps(value)
        if self is FieldType.BOOLEAN:
            if isinstance(value, str):
                return "t" if value.strip().lower() in _TRUE_VALUES else "f"
            return "t" if value else "f"
        return str(value)

    def cast(self, raw: str | None) -> Any:
        """Convert stored text back to the declared type."""
        if raw is None:
            return None
        if self in (FieldType.INTEGER, FieldType.JSON) and not raw.strip():
            return None
        if self is FieldType.INTEGER:
            return int(raw)
        if self is FieldType.BOOLEAN:
            return raw.strip().lower() in _TRUE_VALUES
        if self is FieldType.JSON:
            return json.loads(raw)
        return raw


@dataclass(frozen=True)
class FieldDefinition:
    name: str
    value_type: FieldType


class FieldRegistry:
    """
    Registry of custom field definitions.

    Re-registering a field with the same type is a no-op; a different type is
    a configuration error. Once frozen, no further registrations are accepted.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, FieldDefinition] = {}
        self._frozen = False

    def register(self, name: str, value_type: FieldType | str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise FieldConfigurationError("Custom field name must be a non-empty string", field=name)
        parsed = FieldType.parse(value_type, field=name)

        existing = self._definitions.get(name)
        if existing is not None:
            if existing.value_type is parsed:
                return
            raise FieldConflictError(name, existing.value_type.value, parsed.value)
        if self._frozen:
            raise RegistryFrozenError(name)

        self._definitions[name] = FieldDefinition(name=name, value_type=parsed)
        logger.info("Custom field registered: %s (%s)", name, parsed.value)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> FieldDefinition | None:
        return self._definitions.get(name)

    def require(self, name: str) -> FieldDefinition:
        definition = self._definitions.get(name)
        if definition is None:
            raise FieldNotRegisteredError(name)
        return definition

    def definitions(self) -> list[FieldDefinition]:
        """Return all definitions in registration order."""
        return list(self._definitions.values())

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)
