"""
Field Registrar Tests

Test classes:
    TestFieldType      — parsing plus text dump/cast per type
    TestFieldRegistry  — registration, idempotence, conflicts, freezing
"""

import pytest

from topic_fields.exceptions import (
    FieldConfigurationError,
    FieldConflictError,
    FieldNotRegisteredError,
    RegistryFrozenError,
    UnknownFieldTypeError,
)
from topic_fields.fields import FieldDefinition, FieldRegistry, FieldType


class TestFieldType:
    @pytest.mark.parametrize("raw", ["string", "integer", "boolean", "json"])
    def test_parse_known_types(self, raw):
        assert FieldType.parse(raw).value == raw

    def test_parse_is_case_insensitive(self):
        assert FieldType.parse(" Integer ") is FieldType.INTEGER

    def test_parse_accepts_member(self):
        assert FieldType.parse(FieldType.JSON) is FieldType.JSON

    @pytest.mark.parametrize("raw", ["float", "", None, 3])
    def test_parse_rejects_unknown(self, raw):
        with pytest.raises(UnknownFieldTypeError):
            FieldType.parse(raw)

    def test_none_is_absent_both_ways(self):
        for field_type in FieldType:
            assert field_type.dump(None) is None
            assert field_type.cast(None) is None

    def test_integer_cast(self):
        assert FieldType.INTEGER.dump("42") == "42"
        assert FieldType.INTEGER.cast("42") == 42

    def test_boolean_dump_and_cast(self):
        assert FieldType.BOOLEAN.dump(True) == "t"
        assert FieldType.BOOLEAN.dump(False) == "f"
        assert FieldType.BOOLEAN.dump("true") == "t"
        assert FieldType.BOOLEAN.cast("t") is True
        assert FieldType.BOOLEAN.cast("f") is False

    def test_json_dump_and_cast(self):
        raw = FieldType.JSON.dump({"a": [1, 2]})
        assert isinstance(raw, str)
        assert FieldType.JSON.cast(raw) == {"a": [1, 2]}

    @pytest.mark.parametrize("field_type", [FieldType.INTEGER, FieldType.JSON])
    @pytest.mark.parametrize("raw", ["", "   "])
    def test_blank_text_casts_to_absent(self, field_type, raw):
        assert field_type.cast(raw) is None

    def test_string_keeps_empty_string(self):
        assert FieldType.STRING.dump("") == ""
        assert FieldType.STRING.cast("") == ""


class TestFieldRegistry:
    def test_register_and_get(self):
        reg = FieldRegistry()
        reg.register("color", "string")
        assert reg.get("color") == FieldDefinition(name="color", value_type=FieldType.STRING)
        assert "color" in reg
        assert len(reg) == 1

    def test_get_unknown_returns_none(self):
        assert FieldRegistry().get("missing") is None

    def test_require_unknown_raises(self):
        with pytest.raises(FieldNotRegisteredError):
            FieldRegistry().require("missing")

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, name):
        with pytest.raises(FieldConfigurationError):
            FieldRegistry().register(name, "string")

    def test_unknown_type_rejected(self):
        reg = FieldRegistry()
        with pytest.raises(UnknownFieldTypeError) as exc_info:
            reg.register("color", "decimal")
        assert exc_info.value.details["field"] == "color"
        assert "color" not in reg

    def test_identical_reregistration_is_noop(self):
        reg = FieldRegistry()
        reg.register("count", "integer")
        reg.register("count", FieldType.INTEGER)
        assert len(reg) == 1

    def test_conflicting_reregistration_rejected(self):
        reg = FieldRegistry()
        reg.register("count", "integer")
        with pytest.raises(FieldConflictError):
            reg.register("count", "string")
        assert reg.get("count").value_type is FieldType.INTEGER

    def test_conflict_after_freeze_is_configuration_error(self):
        reg = FieldRegistry()
        reg.register("count", "integer")
        reg.freeze()
        with pytest.raises(FieldConfigurationError):
            reg.register("count", "json")

    def test_identical_reregistration_after_freeze_allowed(self):
        reg = FieldRegistry()
        reg.register("count", "integer")
        reg.freeze()
        reg.register("count", "integer")
        assert reg.frozen

    def test_new_field_after_freeze_rejected(self):
        reg = FieldRegistry()
        reg.freeze()
        with pytest.raises(RegistryFrozenError):
            reg.register("late", "string")

    def test_definitions_in_registration_order(self):
        reg = FieldRegistry()
        reg.register("b", "string")
        reg.register("a", "boolean")
        assert [d.name for d in reg.definitions()] == ["b", "a"]

    def test_definition_is_immutable(self):
        definition = FieldDefinition(name="x", value_type=FieldType.STRING)
        with pytest.raises(AttributeError):
            definition.name = "y"  # type: ignore[misc]
