import logging
import math
from datetime import datetime, timezone
from typing import Any, Optional, Union

from pydantic import field_serializer

from .base import Document

logger = logging.getLogger(__name__)

Number = Union[int, float]


def coerce_number(value: Any) -> Optional[Number]:
    """Return ``value`` as a number, or None if it does not read as one.

    Integral values come back as ``int`` so ``"42"``, ``"42.0"`` and ``42``
    all give ``42``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) if value.is_integer() else value
    if isinstance(value, int):
        return value
    return None


def parse_date(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string or epoch milliseconds. Empty means no date."""
    if not value:
        return None
    try:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        if isinstance(value, str):
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (ValueError, OverflowError, OSError):
        pass
    logger.warning(f"Unparseable appointment date {value!r}, storing null")
    return None


def is_blank(value: Any) -> bool:
    return value is None or value == ""


class Appointment(Document):
    # Number when the caller's value reads as one, otherwise as sent.
    appointment_id: Any = None
    title: Any = None
    description: Any = None
    date: Any = None
    user_id: Any = None

    @classmethod
    def from_payload(cls, payload: dict, appointment_id: Any) -> "Appointment":
        return cls(
            appointment_id=appointment_id,
            title=payload.get("title"),
            description=payload.get("description"),
            date=parse_date(payload.get("date")),
            user_id=payload.get("user_id"),
        )

    @field_serializer("date", when_used="json")
    def serialize_date(self, value: Any) -> Any:
        # always UTC with a Z suffix; naive values were stored as UTC
        if not isinstance(value, datetime):
            return value
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
