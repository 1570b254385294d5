from typing import Dict, FrozenSet

from fastapi import HTTPException, status

from futsal_booking.models.booking import BookingStatus

_PENDING = BookingStatus.PENDING.value
_CONFIRMED = BookingStatus.CONFIRMED.value
_CANCELLED = BookingStatus.CANCELLED.value
_COMPLETED = BookingStatus.COMPLETED.value

# Shared by bookings and kit bookings. Cancelled and completed are terminal.
STATUS_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    _PENDING: frozenset({_CONFIRMED, _CANCELLED}),
    _CONFIRMED: frozenset({_COMPLETED, _CANCELLED}),
    _CANCELLED: frozenset(),
    _COMPLETED: frozenset(),
}


def is_transition_allowed(current: str, target: str) -> bool:
    return target in STATUS_TRANSITIONS.get(current, frozenset())


def ensure_transition_allowed(current: str, target: str, *, entity: str = "Booking") -> None:
    if not is_transition_allowed(current, target):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{entity} cannot move from '{current}' to '{target}'",
        )


__all__ = ["STATUS_TRANSITIONS", "ensure_transition_allowed", "is_transition_allowed"]
