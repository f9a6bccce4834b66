"""
Topic Custom Fields

Public API:
    FieldType, FieldDefinition, FieldRegistry — field registration
    FieldAccessor, BoundField, EntityFields  — get/set access on topics
    PluginRegistry, plugin_registry          — hooks, serializer fields, preloads
    TopicRevisor, RevisionContext            — edit transaction
    LifecycleSynchronizer                    — create/edit handlers
    TopicViewSerializer, TopicListSerializer — detail and list output
    TopicCustomFieldPlugin, initialize_plugins
"""

from .accessors import BoundField, EntityFields, FieldAccessor
from .fields import FieldDefinition, FieldRegistry, FieldType
from .lifecycle import LifecycleSynchronizer
from .loader import initialize_plugins
from .plugin import TopicCustomFieldPlugin
from .registry import PluginRegistry, plugin_registry
from .revisor import ChangeRecord, RevisionContext, TopicRevisor
from .serializers import TopicListSerializer, TopicViewSerializer

__all__ = [
    "BoundField",
    "ChangeRecord",
    "EntityFields",
    "FieldAccessor",
    "FieldDefinition",
    "FieldRegistry",
    "FieldType",
    "LifecycleSynchronizer",
    "PluginRegistry",
    "RevisionContext",
    "TopicCustomFieldPlugin",
    "TopicListSerializer",
    "TopicRevisor",
    "TopicViewSerializer",
    "initialize_plugins",
    "plugin_registry",
]
