"""
Topic stand-in used by the revision pipeline, serializers and tests.

The real topic record belongs to the host application; the extension only
relies on ``id``, ``title`` and the ``custom_fields`` mapping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Topic:
    id: int
    title: str = ""
    custom_fields: dict[str, Any] = field(default_factory=dict)
