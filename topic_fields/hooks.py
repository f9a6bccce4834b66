"""
Hook Constants

Centralised list of hook names that listeners can subscribe to.
Hook names follow the `category.action` convention.
"""

from __future__ import annotations

# ── Topic lifecycle ───────────────────────────────────────────────────────────
# Fired after a topic and its first post are persisted: (topic, opts, user)
HOOK_TOPIC_CREATED = "topic.created"
# Fired inside the revision transaction: (tc, fields)
HOOK_TOPIC_REVISING = "topic.revising"

# ── Serialization ─────────────────────────────────────────────────────────────
# Fired once per detail render: (topic, data)
HOOK_TOPIC_VIEW_SERIALIZE = "topic_view.serialize"
# Fired once per list render, before any item is serialized: (topics, cache)
HOOK_TOPIC_LIST_PRELOAD = "topic_list.preload"
# Fired once per list item: (item, data)
HOOK_TOPIC_LIST_ITEM_SERIALIZE = "topic_list_item.serialize"

# ── Serializer view names ─────────────────────────────────────────────────────
VIEW_TOPIC = "topic_view"
VIEW_TOPIC_LIST_ITEM = "topic_list_item"

ALL_VIEWS: list[str] = [VIEW_TOPIC, VIEW_TOPIC_LIST_ITEM]

# ── Master list ───────────────────────────────────────────────────────────────
ALL_HOOKS: list[str] = [
    HOOK_TOPIC_CREATED,
    HOOK_TOPIC_REVISING,
    HOOK_TOPIC_VIEW_SERIALIZE,
    HOOK_TOPIC_LIST_PRELOAD,
    HOOK_TOPIC_LIST_ITEM_SERIALIZE,
]
