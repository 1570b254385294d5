from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from futsal_booking.core.config import settings
from futsal_booking.dependencies import get_db
from futsal_booking.models.user import User, UserRole
from futsal_booking.repository import user_repository

bearer_scheme = HTTPBearer(auto_error=False)


def _credentials_exception(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_access_token(
    data: Dict[str, str],
    *,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a token the same way the auth service does."""

    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Validate the bearer token and resolve it to a stored user.

    Raises an HTTP 401 error when the token is missing, invalid, or points to a
    user that no longer exists.
    """

    if credentials is None or not credentials.scheme or credentials.scheme.lower() != "bearer":
        raise _credentials_exception("Not authenticated")

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except JWTError as exc:
        raise _credentials_exception() from exc

    user_id = payload.get("sub")
    if user_id is None:
        raise _credentials_exception()

    try:
        user_id_int = int(user_id)
    except (TypeError, ValueError) as exc:
        raise _credentials_exception() from exc

    user = user_repository.get_user(db, user_id_int)
    if user is None:
        raise _credentials_exception()

    return user


def require_owner(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.FUTSAL_OWNER.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Insufficient permissions.",
        )
    return current_user


__all__ = ["create_access_token", "get_current_user", "require_owner"]
