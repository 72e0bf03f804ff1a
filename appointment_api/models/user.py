from typing import Any

from .base import Document


class User(Document):
    # Values are stored as sent; nothing here is validated or unique.
    user_id: Any = None
    user_name: Any = None
    password: Any = None
    mobile: Any = None

    @classmethod
    def from_payload(cls, payload: dict) -> "User":
        return cls(
            user_id=payload.get("user_id"),
            user_name=payload.get("user_name"),
            password=payload.get("password"),
            mobile=payload.get("mobile"),
        )
