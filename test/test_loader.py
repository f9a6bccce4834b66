"""
Configuration and Plugin Loader Tests

Test classes:
    TestSettings          — environment-driven settings
    TestFieldConfig       — configuration struct validation
    TestPluginLoader      — JSON config I/O and initialize_plugins
"""

from __future__ import annotations

import dataclasses
import json
from unittest.mock import patch

import pytest

from topic_fields import loader as loader_module
from topic_fields.config import FieldConfig, Settings
from topic_fields.exceptions import FieldConfigurationError, UnknownFieldTypeError
from topic_fields.fields import FieldType
from topic_fields.hooks import HOOK_TOPIC_CREATED, VIEW_TOPIC, VIEW_TOPIC_LIST_ITEM
from topic_fields.plugin import PLUGIN_NAME
from topic_fields.registry import PluginRegistry
from topic_fields.revisor import TopicRevisor
from topic_fields.store import InMemoryCustomFieldStore


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "plugins_config.json"
    with patch.object(loader_module, "_PLUGINS_CONFIG_FILE", path):
        yield path


def _init(settings: Settings) -> tuple[PluginRegistry, TopicRevisor]:
    registry = PluginRegistry()
    store = InMemoryCustomFieldStore()
    revisor = TopicRevisor(registry, store)
    loader_module.initialize_plugins(registry, revisor, store, settings)
    return registry, revisor


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("TOPIC_CUSTOM_FIELD_NAME", "TOPIC_CUSTOM_FIELD_TYPE", "TOPIC_CUSTOM_FIELD_ENABLED"):
            monkeypatch.delenv(var, raising=False)
        s = Settings(_env_file=None)
        assert s.topic_custom_field_name == "topic_custom_field"
        assert s.topic_custom_field_type == "string"
        assert s.topic_custom_field_enabled is True

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("TOPIC_CUSTOM_FIELD_NAME", "mood")
        monkeypatch.setenv("TOPIC_CUSTOM_FIELD_TYPE", "integer")
        monkeypatch.setenv("TOPIC_CUSTOM_FIELD_ENABLED", "false")
        s = Settings(_env_file=None)
        config = loader_module.build_field_config(s)
        assert config == FieldConfig(name="mood", value_type=FieldType.INTEGER, enabled=False)


class TestFieldConfig:
    def test_is_frozen(self):
        config = FieldConfig.from_values("mood", "string")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.name = "other"  # type: ignore[misc]

    def test_empty_name_rejected(self):
        with pytest.raises(FieldConfigurationError):
            FieldConfig.from_values("  ", "string")

    def test_unknown_type_rejected(self):
        with pytest.raises(UnknownFieldTypeError):
            FieldConfig.from_values("mood", "float")


class TestPluginLoader:
    def test_load_returns_defaults_without_file(self, config_file):
        assert loader_module.load_plugins_config() == {PLUGIN_NAME: {}}

    def test_load_reads_file(self, config_file):
        data = {PLUGIN_NAME: {"enabled": False, "field_name": "mood"}}
        config_file.write_text(json.dumps(data), encoding="utf-8")
        assert loader_module.load_plugins_config() == data

    def test_load_recovers_from_corrupt_json(self, config_file):
        config_file.write_text("{not valid json", encoding="utf-8")
        assert loader_module.load_plugins_config() == {PLUGIN_NAME: {}}

    def test_returns_new_dict_each_call(self, config_file):
        c1 = loader_module.load_plugins_config()
        c1[PLUGIN_NAME]["enabled"] = False
        assert loader_module.load_plugins_config() == {PLUGIN_NAME: {}}

    def test_build_field_config_prefers_json(self):
        s = Settings(_env_file=None, topic_custom_field_name="env_name", topic_custom_field_type="string")
        config = loader_module.build_field_config(s, {"field_name": "json_name", "field_type": "boolean"})
        assert config.name == "json_name"
        assert config.value_type is FieldType.BOOLEAN

    def test_initialize_plugins_wires_everything(self, config_file):
        s = Settings(_env_file=None, topic_custom_field_name="mood", topic_custom_field_type="json")
        registry, revisor = _init(s)

        assert registry.is_registered(PLUGIN_NAME)
        assert registry.fields.get("mood").value_type is FieldType.JSON
        assert registry.fields.frozen
        assert len(registry.listeners(HOOK_TOPIC_CREATED)) == 1
        assert revisor.tracked_fields() == ["mood"]
        assert [f.name for f in registry.serializer_fields(VIEW_TOPIC)] == ["mood"]
        assert [f.name for f in registry.serializer_fields(VIEW_TOPIC_LIST_ITEM)] == ["mood"]
        assert registry.preloaded_fields() == ["mood"]

    def test_initialize_plugins_uses_json_overrides(self, config_file):
        config_file.write_text(json.dumps({PLUGIN_NAME: {"enabled": False}}), encoding="utf-8")
        registry, _ = _init(Settings(_env_file=None))
        assert registry.get(PLUGIN_NAME).enabled is False
        assert registry.get(PLUGIN_NAME).config == {"enabled": False}

    def test_bad_type_is_fatal(self, config_file):
        with pytest.raises(UnknownFieldTypeError):
            _init(Settings(_env_file=None, topic_custom_field_type="decimal"))

    def test_late_conflicting_registration_rejected(self, config_file):
        registry, _ = _init(Settings(_env_file=None, topic_custom_field_name="mood", topic_custom_field_type="string"))
        with pytest.raises(FieldConfigurationError):
            registry.fields.register("mood", "integer")
