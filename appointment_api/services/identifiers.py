"""Lookup of appointments by a raw path identifier.

An appointment may have been stored with a numeric ``appointment_id``, a
string one, or be addressed only by its MongoDB ``_id``. ``resolve`` tries
those in that order and stops at the first filter that matches, so a
numeric record is never shadowed by a string one that looks the same.
"""

import threading
import time
from typing import Awaitable, Callable, Optional, TypeVar

from bson import ObjectId

from ..models.appointment import coerce_number

T = TypeVar("T")

Filter = dict
Strategy = Callable[[str], Optional[Filter]]


def numeric_key(raw_id: str) -> Optional[Filter]:
    number = coerce_number(raw_id)
    if number is None:
        return None
    return {"appointment_id": number}


def string_key(raw_id: str) -> Optional[Filter]:
    return {"appointment_id": raw_id}


def native_key(raw_id: str) -> Optional[Filter]:
    if not ObjectId.is_valid(raw_id):
        return None
    return {"_id": ObjectId(raw_id)}


STRATEGIES: tuple = (numeric_key, string_key, native_key)


async def resolve(
    raw_id: str,
    action: Callable[[Filter], Awaitable[T]],
    matched: Callable[[T], bool] = lambda result: result is not None,
    strategies: tuple = STRATEGIES,
) -> Optional[T]:
    """Run ``action`` with each strategy's filter until ``matched`` accepts
    the result. Returns that result, or None when nothing matched."""
    for strategy in strategies:
        query = strategy(raw_id)
        if query is None:
            continue
        result = await action(query)
        if matched(result):
            return result
    return None


class AppointmentIdGenerator:
    """Millisecond timestamps, bumped so that no two calls return the same id."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            now = int(self._clock() * 1000)
            self._last = max(now, self._last + 1)
            return self._last


next_appointment_id = AppointmentIdGenerator()
