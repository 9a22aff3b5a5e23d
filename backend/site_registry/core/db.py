from __future__ import annotations

from functools import wraps
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from site_registry.core.config import settings
from site_registry.core.errors import StorageFailure
from site_registry.core.logging import logger


Base = declarative_base()

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    connect_args=_connect_args,
    future=True,
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def storage_guard(func):
    """
    Translate SQLAlchemy errors raised by a store call into StorageFailure.

    The wrapped function must take the Session as its first argument; the
    session is rolled back before the error propagates. Registry errors pass
    through untouched.

    Example:
        @storage_guard
        def get_site(db: Session, site_id: int) -> Site:
            ...
    """

    @wraps(func)
    def wrapper(db: Session, *args, **kwargs):
        try:
            return func(db, *args, **kwargs)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(
                "storage.failed",
                extra={"operation": func.__name__, "error_code": type(exc).__name__},
            )
            raise StorageFailure(f"{func.__name__} failed in storage") from exc

    return wrapper
