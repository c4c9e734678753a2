# stockpile_api/database.py
import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()

_IN_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


class DatabaseError(Exception):
    """Raised by the stores when a statement fails. The cause is logged, never sent to clients."""

    def __init__(self, message: str = "Database error occurred"):
        super().__init__(message)


class Database:
    """Owns the engine (and with it the connection pool) and the session factory.

    One instance is built per application and handed to request handlers
    through :func:`get_db`; sessions are acquired per request and released
    when the request ends.
    """

    def __init__(self, url: str, **engine_kwargs):
        # Configuration depends on the backend
        if url.startswith("sqlite"):
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
            if url in _IN_MEMORY_URLS:
                # A single shared connection keeps the in-memory database alive
                engine_kwargs.setdefault("poolclass", StaticPool)
        else:
            engine_kwargs.setdefault("pool_pre_ping", True)

        self.url = url
        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        # Import models so they register on Base.metadata
        from stockpile_api.models import stockpile, users  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        logger.debug("Disposing connection pool for %s", self.engine.url)
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    database: Database = request.app.state.db
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
