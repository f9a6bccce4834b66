import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from topic_fields.config import settings
from topic_fields.database import create_engine_from_settings, init_db, make_session_factory
from topic_fields.loader import initialize_plugins
from topic_fields.registry import plugin_registry
from topic_fields.revisor import TopicRevisor
from topic_fields.routes.plugins import router as plugins_router
from topic_fields.store import SQLAlchemyCustomFieldStore

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = create_engine_from_settings(settings)
    init_db(engine)
    store = SQLAlchemyCustomFieldStore(make_session_factory(engine), plugin_registry.fields)
    revisor = TopicRevisor(plugin_registry, store)
    if not plugin_registry.is_registered("topic_custom_fields"):
        initialize_plugins(plugin_registry, revisor, store, settings)
    app.state.store = store
    app.state.revisor = revisor
    logger.info("%s v%s started", settings.app_name, settings.app_version)
    yield
    for plugin in plugin_registry.all_plugins():
        plugin.on_unload()
    engine.dispose()


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
app.include_router(plugins_router, prefix="/api/v1/plugins")


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000)
