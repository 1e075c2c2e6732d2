"""
Database engine, session factory and per-operation session scope
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from clipshare.core.config import Settings
from clipshare.core.errors import StoreError

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """Create the process-wide engine; its pool bounds concurrent connections"""
    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite":
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def session_scope(session_factory: sessionmaker, error_message: str = "Database error") -> Iterator[Session]:
    """
    Acquire a session for one operation.

    Commits on success, rolls back on failure and always returns the
    connection to the pool. SQLAlchemy failures surface as StoreError.
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{error_message}: {e}")
        raise StoreError(error_message, detail=str(e)) from e
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
