from __future__ import annotations

import logging

from sqlalchemy import Engine, create_engine, event, inspect
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite leaves FK enforcement off per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Engine for the content store; in-memory SQLite shares one connection so every session sees the seed."""
    is_sqlite = database_url.startswith("sqlite")
    options: dict = {"echo": echo}
    if is_sqlite and ":memory:" in database_url:
        options["connect_args"] = {"check_same_thread": False}
        options["poolclass"] = StaticPool
    engine = create_engine(database_url, **options)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_schema(engine: Engine) -> list[str]:
    """Create missing ``sc_*`` tables and return the names of the ones created."""
    existing = set(inspect(engine).get_table_names())
    Base.metadata.create_all(engine)
    created = [name for name in Base.metadata.tables if name not in existing]
    if created:
        logger.info("Created %d content tables", len(created))
    return created
