"""Read access to users registered by the auth service."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from futsal_booking.models.user import User


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id_user == user_id).first()


__all__ = ["get_user"]
