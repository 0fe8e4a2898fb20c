"""
Celebrity Penpal - Database Configuration
SQLite (by default) connection using SQLAlchemy.

The engine lives on an explicitly constructed Database handle that the app
keeps on `app.state`; request handlers receive sessions through `get_db`.
"""
import logging
import os
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Base class for ORM models
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite leaves foreign keys unenforced unless asked, per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one database URL."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_kwargs = {"echo": echo}

        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if parsed.database in (None, "", ":memory:"):
                # One shared connection, otherwise each session sees an empty db
                engine_kwargs["poolclass"] = StaticPool
            else:
                os.makedirs(os.path.dirname(os.path.abspath(parsed.database)), exist_ok=True)

        self.engine = create_engine(url, **engine_kwargs)
        if parsed.get_backend_name() == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def init_db(self) -> None:
        """Create all tables."""
        # Register models on Base.metadata
        from .models import db_models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database ready: {self.engine.url.render_as_string(hide_password=True)}")

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for FastAPI - yields database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
