from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from topic_fields.config import Settings, settings as default_settings
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_engine_from_settings(settings: Settings | None = None) -> Engine:
    settings = settings or default_settings
    if settings.database_url.startswith("sqlite"):
        return create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
        )
    # Environment-based configurations
    if settings.environment == "production":
        return create_engine(
            settings.database_url,
            pool_size=20,
            max_overflow=50,
            pool_timeout=60,
            pool_recycle=1800,
        )
    return create_engine(
        settings.database_url,
        echo=True,  # Enable query logging in dev mode
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create the custom field tables if they do not exist yet."""
    # Imported for its side effect of registering the table on Base.metadata
    from topic_fields import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Custom field tables ready on %s", engine.url.render_as_string(hide_password=True))
