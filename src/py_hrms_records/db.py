"""Database configuration and transaction scope for the staff records service."""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Callable, Iterator, Optional

import structlog
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .config import settings
from .exceptions import TransactionUsageError, translate_storage_error

logger = structlog.get_logger(__name__)

SessionFactory = Callable[[], Session]

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None

# Session of the transaction scope currently open in this context, if any
_active_session: ContextVar[Optional[Session]] = ContextVar("active_session", default=None)


class Base(DeclarativeBase):
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine; SQLite gets thread-sharing and enforced foreign keys."""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine = create_engine(database_url, echo=settings.db_echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
        **kwargs,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def configure_database(database_url: Optional[str] = None, **engine_kwargs) -> Engine:
    """(Re)bind the module-level engine and session factory."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = build_engine(database_url or settings.database_url, **engine_kwargs)
    _session_factory = build_session_factory(_engine)
    logger.info("Database configured", dialect=_engine.dialect.name)
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        configure_database()
    return _engine


def get_session_factory() -> sessionmaker:
    if _session_factory is None:
        configure_database()
    return _session_factory


def init_db(engine: Optional[Engine] = None):
    """Create the staff and record_file tables if they do not exist."""
    # Import models so they are registered on the metadata
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=engine or get_engine())


def current_session() -> Optional[Session]:
    """Session of the enclosing transaction scope, or None outside any scope."""
    return _active_session.get()


def ensure_no_active_scope(operation: str):
    if _active_session.get() is not None:
        raise TransactionUsageError(
            f"Standalone operation '{operation}' called inside an active transaction; "
            "use the *_tx form with the scope's session instead."
        )


@contextmanager
def transaction_scope(session_factory: Optional[SessionFactory] = None) -> Iterator[Session]:
    """
    Open a session and a transaction, yield the session, then commit.

    Any exception rolls back every write made through the session. Storage
    exceptions are re-raised as domain errors; domain errors pass through
    unchanged. The session is closed on every exit path.
    """
    factory = session_factory or get_session_factory()
    session = factory()
    token = _active_session.set(session)
    try:
        with session.begin():
            yield session
    except SQLAlchemyError as exc:
        logger.warning(
            "Transaction rolled back",
            error_type=type(exc).__name__,
            error_message=str(exc),
        )
        raise translate_storage_error(exc) from exc
    except Exception as exc:
        logger.debug(
            "Transaction rolled back",
            error_type=type(exc).__name__,
            error_message=str(exc),
        )
        raise
    finally:
        _active_session.reset(token)
        session.close()
