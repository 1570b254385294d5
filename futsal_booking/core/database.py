"""Database configuration for the futsal booking service."""

import logging

from sqlalchemy import BigInteger, Integer, create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from futsal_booking.core.config import settings

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    if make_url(database_url).get_backend_name() == "sqlite":
        # SQLite connections are shared with the threadpool running sync routes.
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# BIGINT keys do not autoincrement on SQLite, where only INTEGER aliases the rowid.
Identifier = BigInteger().with_variant(Integer, "sqlite")


def verify_database_connection() -> None:
    """Ensure the service can connect to the configured database."""

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.exception("Database connection validation failed")
        raise RuntimeError("Failed to connect to the booking database") from exc


__all__ = ["Base", "Identifier", "SessionLocal", "engine", "verify_database_connection"]
