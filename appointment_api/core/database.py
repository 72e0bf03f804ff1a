import asyncio
import logging
from datetime import timezone
from typing import Callable, Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from .config import settings
from .errors import DatabaseConnectionError

logger = logging.getLogger(__name__)

USERS = "users"
APPOINTMENTS = "appointments"


class DatabaseManager:
    """Owns the single MongoDB client shared by every request.

    The client is created on the first ``acquire()`` and reused until
    ``close()``. Concurrent first callers wait on one lock, so only one
    connection is ever opened; they all get the same client back.
    """

    def __init__(
        self,
        uri: str = settings.MONGO_URI,
        db_name: str = settings.DB_NAME,
        server_selection_timeout_ms: int = settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
        client_factory: Callable[..., AsyncMongoClient] = AsyncMongoClient,
    ):
        self.uri = uri
        self.db_name = db_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self._client_factory = client_factory
        self._client: Optional[AsyncMongoClient] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def acquire(self) -> AsyncDatabase:
        """Return the configured database, connecting first if needed."""
        if self._client is None:
            async with self._lock:
                # another request may have connected while we waited
                if self._client is None:
                    self._client = await self._connect()
        return self._client.get_database(self.db_name)

    async def _connect(self) -> AsyncMongoClient:
        logger.info("Mongo client not connected, connecting now...")
        client = self._client_factory(
            self.uri,
            serverSelectionTimeoutMS=self.server_selection_timeout_ms,
            tz_aware=True,
            tzinfo=timezone.utc,
        )
        try:
            await client.aconnect()
            await client.admin.command("ping")
        except PyMongoError as e:
            await client.close()
            raise DatabaseConnectionError(f"Could not connect to MongoDB: {e}") from e
        logger.info(f"Connected to MongoDB, database '{self.db_name}'")
        return client

    async def close(self) -> None:
        async with self._lock:
            if self._client is None:
                return
            client, self._client = self._client, None
            await client.close()
        logger.info("Mongo client closed")
