"""Shared dependencies for the futsal booking service."""

from typing import Generator

from futsal_booking.core.database import SessionLocal


def get_db() -> Generator:
    """Provide a transactional scope around a series of operations."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
