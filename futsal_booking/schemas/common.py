from datetime import time
from typing import Annotated

from pydantic import PlainSerializer

# Facility-local time of day, rendered as ``HH:MM``.
ClockTime = Annotated[
    time,
    PlainSerializer(lambda value: value.strftime("%H:%M"), return_type=str),
]

__all__ = ["ClockTime"]
