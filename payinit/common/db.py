"""Database bootstrap helpers for the payment store."""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from payinit.common.config import settings


def make_engine(database_url: str | None = None, **kwargs) -> Engine:
    """Create the single SQLAlchemy engine used by one process."""

    url = database_url or settings.database_url
    if url.startswith("postgresql"):
        kwargs.setdefault("connect_args", {"connect_timeout": settings.db_connect_timeout_seconds})
    return create_engine(url, pool_pre_ping=True, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    # `expire_on_commit=False` keeps ORM objects readable after commit in handlers.
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""

    pass
