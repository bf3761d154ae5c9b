"""
MongoDB connection lifecycle.

One MongoConnection lives for the whole process. It connects lazily, keeps the
client for reuse across requests, and never raises from ensure_connected():
a failed attempt is logged and left in the FAILED state so the next caller
can try again.
"""
import logging
import threading
from enum import Enum
from typing import Any, Callable, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from moviemaster.core.config import Settings
from moviemaster.core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


class MongoConnection:
    def __init__(
        self,
        settings: Settings,
        client_factory: Callable[..., Any] = MongoClient,
    ):
        self.settings = settings
        self._client_factory = client_factory
        self._client: Optional[Any] = None
        self._collection: Optional[Collection] = None
        self._state = ConnectionState.UNINITIALIZED
        self._lock = threading.Lock()
        self._attempts = 0

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    def ensure_connected(self) -> bool:
        if self.is_connected:
            return True

        seen_attempts = self._attempts
        with self._lock:
            # An attempt that finished while we waited answers for us too.
            if self.is_connected or self._attempts != seen_attempts:
                return self.is_connected

            try:
                return self._connect()
            finally:
                self._attempts += 1

    def _connect(self) -> bool:
        self._state = ConnectionState.CONNECTING
        logger.info("Connecting to MongoDB (timeout=%sms)...", self.settings.connect_timeout_ms)

        client = None
        try:
            client = self._client_factory(
                self.settings.mongo_uri,
                serverSelectionTimeoutMS=self.settings.connect_timeout_ms,
                tz_aware=True,
            )
            client.admin.command("ping")
            db = client.get_default_database(default=self.settings.db_name)
            collection = db[self.settings.movies_collection]
        except PyMongoError as e:
            logger.error("MongoDB connection error: %s", e)
            if client is not None:
                client.close()
            self._client = None
            self._collection = None
            self._state = ConnectionState.FAILED
            return False

        self._client = client
        self._collection = collection
        self._state = ConnectionState.CONNECTED
        logger.info("Successfully connected to MongoDB (db=%s, collection=%s)", db.name, collection.name)
        return True

    def get_collection(self) -> Collection:
        if not self.is_connected or self._collection is None:
            raise StoreUnavailableError(error=StoreUnavailableError.message)
        return self._collection

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                logger.info("MongoDB connection closed")
            self._client = None
            self._collection = None
            self._state = ConnectionState.UNINITIALIZED
