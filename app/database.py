import logging
from typing import Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import SQL_ECHO, get_database_url

logger = logging.getLogger(__name__)

# Create declarative base
Base = declarative_base()


def create_db_engine(database_url: Optional[str] = None, **engine_kwargs) -> Engine:
    """Build the pooled engine the application owns for its whole lifetime."""
    url = database_url or get_database_url()
    connect_args = engine_kwargs.pop("connect_args", {})
    if url.startswith("sqlite"):
        # SQLite connections get shared across the request thread pool
        connect_args.setdefault("check_same_thread", False)
    else:
        engine_kwargs.setdefault("pool_pre_ping", True)
    return create_engine(url, connect_args=connect_args, echo=SQL_ECHO, **engine_kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> bool:
    """
    Create the products and inventory_history tables if they are missing.
    Failures are logged and reported, never raised.
    """
    # import models so they are registered on the metadata
    import app.models.products  # noqa: F401
    import app.models.inventory_history  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Tables created/verified!")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Table create error: {str(e)}")
        return False


# Dependency for database session
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
