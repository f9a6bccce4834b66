"""
Plugin Administration Routes

GET  /api/v1/plugins                → list all registered plugins
GET  /api/v1/plugins/{name}         → get single plugin by name
GET  /api/v1/plugins/{name}/fields  → custom fields registered at startup

Read-only: plugin configuration is fixed for the process lifetime.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from topic_fields.base import PluginBase  # noqa: TC001
from topic_fields.registry import plugin_registry

router = APIRouter(tags=["Plugins"])
logger = logging.getLogger(__name__)


# ── Pydantic schemas ───────────────────────────────────────────────────────────


class PluginResponse(BaseModel):
    name: str
    version: str
    description: str
    author: str
    enabled: bool
    hooks: list[str]
    config: dict[str, Any]
    config_schema: dict[str, Any]


class FieldDefinitionResponse(BaseModel):
    name: str
    value_type: str
    preloaded: bool


# ── Helpers ────────────────────────────────────────────────────────────────────


def _build_response(plugin: PluginBase) -> PluginResponse:
    return PluginResponse(
        name=plugin.meta.name,
        version=plugin.meta.version,
        description=plugin.meta.description,
        author=plugin.meta.author,
        enabled=plugin.enabled,
        hooks=plugin.meta.hooks,
        config=plugin.config,
        config_schema=plugin.meta.config_schema,
    )


def _get_or_404(name: str) -> PluginBase:
    plugin = plugin_registry.get(name)
    if plugin is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Plugin not found: {name}",
        )
    return plugin


# ── Routes ─────────────────────────────────────────────────────────────────────


@router.get("/", response_model=list[PluginResponse])
async def list_plugins() -> list[PluginResponse]:
    """List all registered plugins with their status and configuration."""
    return [_build_response(p) for p in plugin_registry.all_plugins()]


@router.get("/{name}", response_model=PluginResponse)
async def get_plugin(name: str) -> PluginResponse:
    """Get a single plugin by name."""
    plugin = _get_or_404(name)
    return _build_response(plugin)


@router.get("/{name}/fields", response_model=list[FieldDefinitionResponse])
async def get_plugin_fields(name: str) -> list[FieldDefinitionResponse]:
    """List the custom fields registered in the running process."""
    _get_or_404(name)
    preloaded = set(plugin_registry.preloaded_fields())
    return [
        FieldDefinitionResponse(name=d.name, value_type=d.value_type.value, preloaded=d.name in preloaded)
        for d in plugin_registry.fields.definitions()
    ]
