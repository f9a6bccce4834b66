"""
Plugin Registry

PluginRegistry: in-process registry that stores plugins, custom field
definitions, serializer extensions and the ordered listener lists for each
hook.

Hooks are dispatched synchronously in registration order. Unlike a
notification bus, a listener exception is NOT contained: it is logged and
re-raised so the host's create/revise pipeline sees it and can roll back.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from topic_fields.exceptions import UnknownHookError
from topic_fields.fields import FieldRegistry
from topic_fields.hooks import ALL_HOOKS, ALL_VIEWS

if TYPE_CHECKING:
    from topic_fields.base import PluginBase

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


@dataclass(frozen=True)
class SerializerField:
    """A value producer attached to a serializer view under ``name``."""

    view: str
    name: str
    producer: Callable[[Any], Any]
    include_condition: Callable[[], bool] | None = None

    def included(self) -> bool:
        return self.include_condition is None or bool(self.include_condition())


def _listener_name(listener: Listener) -> str:
    return getattr(listener, "__qualname__", repr(listener))


class PluginRegistry:
    """
    In-process registry for forum plugins and their extension points.

    One instance is built at startup and passed to every component that needs
    it; after initialisation its field definitions are frozen.
    """

    def __init__(self) -> None:
        self.fields = FieldRegistry()
        self._plugins: dict[str, PluginBase] = {}
        self._listeners: dict[str, list[Listener]] = defaultdict(list)
        self._serializer_fields: dict[str, list[SerializerField]] = defaultdict(list)
        self._preloaded_fields: list[str] = []

    # ── Registration ──────────────────────────────────────────────────────────

    def register(self, plugin: PluginBase) -> None:
        """Register a loaded plugin by name."""
        self._plugins[plugin.meta.name] = plugin
        logger.info("Plugin registered: %s v%s", plugin.meta.name, plugin.meta.version)

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get(self, name: str) -> PluginBase | None:
        """Return the plugin with the given name, or None if not registered."""
        return self._plugins.get(name)

    def all_plugins(self) -> list[PluginBase]:
        """Return all registered plugins in registration order."""
        return list(self._plugins.values())

    def is_registered(self, name: str) -> bool:
        return name in self._plugins

    # ── Hook subscription & dispatch ──────────────────────────────────────────

    def on(self, hook_name: str, listener: Listener) -> Listener:
        """Subscribe ``listener`` to ``hook_name``; returns the listener."""
        if hook_name not in ALL_HOOKS:
            raise UnknownHookError(hook_name)
        self._listeners[hook_name].append(listener)
        logger.debug("Listener %s subscribed to %s", _listener_name(listener), hook_name)
        return listener

    def listener(self, hook_name: str) -> Callable[[Listener], Listener]:
        """Decorator form of :meth:`on`."""

        def decorator(func: Listener) -> Listener:
            return self.on(hook_name, func)

        return decorator

    def listeners(self, hook_name: str) -> list[Listener]:
        return list(self._listeners.get(hook_name, []))

    def fire_hook(self, hook_name: str, *args: Any, **kwargs: Any) -> list[Any]:
        """
        Call every listener of ``hook_name`` in registration order.

        Returns:
            List of listener return values.

        Raises:
            UnknownHookError: if ``hook_name`` is not a declared hook.
            Exception: whatever a listener raised, after logging it.
        """
        if hook_name not in ALL_HOOKS:
            raise UnknownHookError(hook_name)
        results: list[Any] = []
        for listener in self._listeners.get(hook_name, []):
            try:
                results.append(listener(*args, **kwargs))
            except Exception as exc:
                logger.warning("Listener %s for hook %s raised: %s", _listener_name(listener), hook_name, exc)
                raise
        return results

    # ── Serializer extensions ─────────────────────────────────────────────────

    def add_to_serializer(
        self,
        view: str,
        name: str,
        producer: Callable[[Any], Any],
        include_condition: Callable[[], bool] | None = None,
    ) -> SerializerField:
        """Emit ``producer(obj)`` under ``name`` whenever ``view`` is serialized."""
        if view not in ALL_VIEWS:
            raise UnknownHookError(view)
        serializer_field = SerializerField(view, name, producer, include_condition)
        self._serializer_fields[view].append(serializer_field)
        return serializer_field

    def serializer_fields(self, view: str) -> list[SerializerField]:
        return list(self._serializer_fields.get(view, []))

    # ── List preloading ───────────────────────────────────────────────────────

    def add_preloaded_topic_list_custom_field(self, name: str) -> None:
        """Mark a custom field for batch loading before topic lists are serialized."""
        if name not in self._preloaded_fields:
            self._preloaded_fields.append(name)

    def preloaded_fields(self) -> list[str]:
        return list(self._preloaded_fields)


# ── Global default instance ───────────────────────────────────────────────────
# Populated by initialize_plugins() during application startup.
plugin_registry = PluginRegistry()
