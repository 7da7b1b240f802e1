# src/database.py
import logging
from datetime import datetime, timezone
from typing import Iterator, Optional

from fastapi import Request, Response
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from errors import PersistenceUnavailableError

logger = logging.getLogger(__name__)

Base = declarative_base()


def utcnow() -> datetime:
    """Current UTC time, naive for DB storage."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Database:
    """Owns the engine and session factory for one database URL.

    `connect()` may fail; the instance then stays unavailable and `get_db`
    hands out `None` instead of a session.
    """

    def __init__(self, url: Optional[str], **engine_kwargs):
        self.url = url
        self.engine_kwargs = engine_kwargs
        self.engine = None
        self.SessionLocal = None

    @property
    def available(self) -> bool:
        return self.SessionLocal is not None

    def connect(self) -> bool:
        if not self.url:
            logger.warning("DATABASE_URL not set, running without a database")
            return False
        # sync endpoints run in a threadpool
        if self.url.startswith("sqlite"):
            self.engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        try:
            engine = create_engine(self.url, pool_pre_ping=True, **self.engine_kwargs)
            # Import models so that every table is registered on Base.metadata
            import models  # noqa: F401
            Base.metadata.create_all(bind=engine)
        except OperationalError as e:
            logger.warning(f"Database unavailable, running in stateless mode ({e})")
            return False
        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        logger.info("Database connected and tables created")
        return True

    def session(self) -> Session:
        if not self.available:
            raise PersistenceUnavailableError()
        return self.SessionLocal()

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


def get_db(request: Request) -> Iterator[Optional[Session]]:
    """FastAPI dependency: yields a DB session, or None if the store is unavailable."""
    database: Database = request.app.state.database
    if not database.available:
        yield None
        return
    db = database.session()
    try:
        yield db
    finally:
        db.close()


def require_db(db: Optional[Session]) -> Session:
    """Writes cannot degrade; fail loudly when the store is missing."""
    if db is None:
        raise PersistenceUnavailableError()
    return db


def mark_unavailable(response: Response) -> None:
    """Flag a degraded read so clients can tell "no data" from "no store"."""
    response.headers["X-Storage-Status"] = "unavailable"
