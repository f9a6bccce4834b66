"""
Pytest configuration and fixtures for topic custom field tests
"""

import os
import sys

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

# Settings are read at import time: keep tests off the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from topic_fields.config import FieldConfig  # noqa: E402
from topic_fields.database import init_db, make_session_factory  # noqa: E402
from topic_fields.entities import Topic  # noqa: E402
from topic_fields.fields import FieldType  # noqa: E402
from topic_fields.plugin import TopicCustomFieldPlugin  # noqa: E402
from topic_fields.registry import PluginRegistry  # noqa: E402
from topic_fields.revisor import TopicRevisor  # noqa: E402
from topic_fields.store import InMemoryCustomFieldStore, SQLAlchemyCustomFieldStore  # noqa: E402

FIELD_NAME = "topic_custom_field"


@pytest.fixture
def registry():
    return PluginRegistry()


@pytest.fixture
def store():
    return InMemoryCustomFieldStore()


@pytest.fixture
def revisor(registry, store):
    return TopicRevisor(registry, store)


@pytest.fixture
def field_config():
    return FieldConfig(name=FIELD_NAME, value_type=FieldType.STRING, enabled=True)


@pytest.fixture
def plugin(registry, revisor, store, field_config):
    """A loaded plugin on a fresh registry."""
    p = TopicCustomFieldPlugin(field_config, revisor, store)
    p.on_load(registry, {})
    registry.register(p)
    registry.fields.freeze()
    return p


@pytest.fixture
def make_topic():
    def _make(topic_id=1, title="Hello", **custom_fields):
        return Topic(id=topic_id, title=title, custom_fields=dict(custom_fields))

    return _make


@pytest.fixture
def sql_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_store(sql_engine, registry):
    return SQLAlchemyCustomFieldStore(make_session_factory(sql_engine), registry.fields)
