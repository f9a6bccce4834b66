"""
Plugin Base Classes

PluginMeta: declarative metadata for a plugin (name, version, hooks, config schema).
PluginBase: abstract base class all plugins must subclass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from topic_fields.registry import PluginRegistry


@dataclass
class PluginMeta:
    """
    Declarative metadata describing a plugin.

    Attributes:
        name:          Machine-readable slug, e.g. "topic_custom_fields".
        version:       Semver string, e.g. "1.0.0".
        description:   Human-readable description shown in the admin API.
        author:        Plugin author.
        hooks:         List of hook names this plugin subscribes to.
        config_schema: JSON Schema fragments describing configurable options.
    """

    name: str
    version: str
    description: str
    author: str = "Forum Extensions Team"
    hooks: list[str] = field(default_factory=list)
    config_schema: dict[str, Any] = field(default_factory=dict)


class PluginBase(ABC):
    """
    Abstract base class for forum plugins.

    Subclasses must implement the `meta` property.
    Lifecycle methods default to no-ops so subclasses only override what they need.
    """

    _enabled: bool = True
    _config: dict[str, Any] | None = None

    @property
    @abstractmethod
    def meta(self) -> PluginMeta:
        """Return the plugin's metadata."""
        ...

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def config(self) -> dict[str, Any]:
        """The config dict the plugin was loaded with."""
        return dict(self._config or {})

    def on_load(self, registry: PluginRegistry, config: dict[str, Any]) -> None:  # noqa: B027
        """
        Called once at startup with the registry and the plugin's config dict.

        Override to register fields, subscribe listeners and add serializer
        fields. Everything registered here is fixed for the process lifetime.
        """

    def on_unload(self) -> None:  # noqa: B027
        """Called when the application shuts down."""
