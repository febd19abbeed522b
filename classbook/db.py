"""SQLAlchemy engine, session factory and declarative base."""

import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from classbook.services.config_service import get_config_service

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def create_db_engine(database_url: Optional[str] = None, **engine_kwargs) -> Engine:
    """Create an engine for ``database_url``, falling back to configuration."""
    config = get_config_service()
    if database_url is None:
        database_url = config.get_database_url()
    engine_kwargs.setdefault("echo", config.get_echo_sql())
    engine_kwargs.setdefault("pool_pre_ping", True)
    return create_engine(database_url, **engine_kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory used by units of work.

    Loaded objects are not expired on commit.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    # Register table classes on Base.metadata before create_all
    from classbook.repositories import tables  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created or already present on %s", engine.url.render_as_string(hide_password=True))
