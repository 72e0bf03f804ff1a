import logging
from typing import Optional

from pymongo.asynchronous.database import AsyncDatabase

from ..core.database import USERS
from ..models.user import User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncDatabase):
        self.db = db
        self.users = db[USERS]

    async def get_user(self, user_id: str) -> Optional[User]:
        """Find a user by exact ``user_id``."""
        doc = await self.users.find_one({"user_id": user_id})
        if doc is None:
            return None
        return User.model_validate(doc)

    async def register_user(self, payload: dict) -> str:
        """Store a new user and return its storage key.

        There is no uniqueness check on ``user_id`` and the password is
        stored exactly as received.
        """
        user = User.from_payload(payload)
        result = await self.users.insert_one(user.to_document())
        logger.info(
            f"Inserted user -> db: {self.db.name}, collection: {USERS}, "
            f"insertedId: {result.inserted_id}"
        )
        return str(result.inserted_id)
