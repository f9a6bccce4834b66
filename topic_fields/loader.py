"""
Plugin Loader

Reads plugin configuration from `data/plugins_config.json` and
initialises the topic custom field plugin at application startup.

Environment settings (topic_fields.config) give the defaults; the JSON file, when
present, overrides them per plugin. Either way the resulting FieldConfig is
fixed for the rest of the process.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from topic_fields.config import FieldConfig, Settings
from topic_fields.plugin import PLUGIN_NAME, TopicCustomFieldPlugin

if TYPE_CHECKING:
    from topic_fields.registry import PluginRegistry
    from topic_fields.revisor import TopicRevisor
    from topic_fields.store import CustomFieldStore

logger = logging.getLogger(__name__)

# ── Config file location ──────────────────────────────────────────────────────
_PLUGINS_CONFIG_FILE = Path("data/plugins_config.json")

# ── Default plugin config ─────────────────────────────────────────────────────
_DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    PLUGIN_NAME: {},
}


# ── Config I/O ────────────────────────────────────────────────────────────────


def load_plugins_config() -> dict[str, dict[str, Any]]:
    """
    Load plugin configuration from disk.

    Returns defaults if the file does not exist or cannot be parsed.
    """
    if _PLUGINS_CONFIG_FILE.exists():
        try:
            return json.loads(_PLUGINS_CONFIG_FILE.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read plugins config: %s", exc)
    return copy.deepcopy(_DEFAULT_CONFIG)


def build_field_config(settings: Settings, plugin_config: dict[str, Any] | None = None) -> FieldConfig:
    """Merge environment settings with the plugin's JSON overrides."""
    plugin_config = plugin_config or {}
    return FieldConfig.from_values(
        plugin_config.get("field_name", settings.topic_custom_field_name),
        plugin_config.get("field_type", settings.topic_custom_field_type),
        plugin_config.get("enabled", settings.topic_custom_field_enabled),
    )


# ── Startup initialisation ────────────────────────────────────────────────────


def initialize_plugins(
    registry: PluginRegistry,
    revisor: TopicRevisor,
    store: CustomFieldStore,
    settings: Settings | None = None,
) -> TopicCustomFieldPlugin:
    """
    Load and register the topic custom field plugin, then freeze field registration.

    Raises:
        FieldConfigurationError: on an empty field name, unknown field type or
            conflicting registration. These are fatal: startup must abort.
    """
    if settings is None:
        from topic_fields.config import settings

    config = load_plugins_config()
    plugin_config = config.get(PLUGIN_NAME, {})

    plugin = TopicCustomFieldPlugin(build_field_config(settings, plugin_config), revisor, store)
    plugin.on_load(registry, plugin_config)
    registry.register(plugin)
    registry.fields.freeze()

    logger.info("Plugin initialisation complete — %d plugins loaded", len(registry.all_plugins()))
    return plugin
