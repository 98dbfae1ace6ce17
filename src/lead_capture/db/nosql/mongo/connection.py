from __future__ import annotations

import asyncio
import logging
import re
from enum import StrEnum
from typing import Any, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import OperationFailure, PyMongoError
from pymongo.monitoring import TopologyListener

from lead_capture.db.settings import MongoSettings
from lead_capture.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., Any]

_CREDENTIALS = re.compile(r"//[^@/]+@")


class ConnectionState(StrEnum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"


def redact_uri(uri: str) -> str:
    return _CREDENTIALS.sub("//***@", uri, count=1)


class _TopologyWatcher(TopologyListener):
    """Forwards driver topology changes to the manager's event loop.

    pymongo calls listeners from its monitor threads; the manager state is only
    ever written on the loop.
    """

    def __init__(self, manager: "MongoConnectionManager", generation: int, loop: asyncio.AbstractEventLoop):
        self._manager = manager
        self._generation = generation
        self._loop = loop

    def opened(self, event) -> None:
        pass

    def description_changed(self, event) -> None:
        writable = event.new_description.has_writable_server()
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._manager._on_topology_change, self._generation, writable)

    def closed(self, event) -> None:
        pass


class MongoConnectionManager:
    """Owns the single MongoDB client and its readiness state.

    ``ensure_connected`` is idempotent and memoizes the in-flight attempt, so
    concurrent callers share one handshake.
    """

    def __init__(
        self,
        settings: MongoSettings,
        *,
        uri: Optional[str] = None,
        client_factory: Optional[ClientFactory] = None,
    ):
        self.settings = settings
        self._uri = uri or settings.resolved_uri()
        self._client_factory: ClientFactory = client_factory or AsyncIOMotorClient
        self._state = ConnectionState.DISCONNECTED
        self._client: Any = None
        self._db: Optional[AsyncIOMotorDatabase] = None
        self._pending: Optional[asyncio.Task] = None
        self._generation = 0
        self.last_error: Optional[str] = None

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def state(self) -> ConnectionState:
        return self._state

    def current_state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    @property
    def database(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            raise DatabaseConnectionError("MongoDB is not connected")
        return self._db

    @property
    def collection(self) -> AsyncIOMotorCollection:
        return self.database[self.settings.collection]

    async def ensure_connected(self) -> AsyncIOMotorDatabase:
        if self._state is ConnectionState.CONNECTED and self._db is not None:
            return self._db
        if self._pending is None:
            logger.debug("Starting MongoDB connection attempt")
            task = asyncio.get_running_loop().create_task(self._connect())
            task.add_done_callback(self._attempt_finished)
            self._pending = task
        else:
            logger.debug("Joining in-flight MongoDB connection attempt")
        # shield: a cancelled waiter must not cancel the shared attempt
        return await asyncio.shield(self._pending)

    def _attempt_finished(self, task: asyncio.Task) -> None:
        if self._pending is task:
            self._pending = None
        if not task.cancelled():
            # mark retrieved even when every waiter went away
            task.exception()

    async def _connect(self) -> AsyncIOMotorDatabase:
        await self._close_client()
        self._generation += 1
        generation = self._generation
        self._set_state(ConnectionState.CONNECTING)
        logger.info(
            "Creating new MongoDB connection",
            extra={"uri": redact_uri(self._uri), "generation": generation},
        )

        timeout = self.settings.connect_timeout_seconds
        client = None
        try:
            client = self._client_factory(
                self._uri,
                serverSelectionTimeoutMS=int(timeout * 1000),
                maxPoolSize=self.settings.max_pool_size,
                event_listeners=[_TopologyWatcher(self, generation, asyncio.get_running_loop())],
            )
            await asyncio.wait_for(client.admin.command("ping"), timeout=timeout)
            db = client.get_default_database(default=self.settings.db_name)
            # part of the attempt: not connected until the indexes are in place
            await self._ensure_indexes(db[self.settings.collection])
        except asyncio.CancelledError:
            if client is not None:
                client.close()
            raise
        except (asyncio.TimeoutError, PyMongoError) as exc:
            if client is not None:
                client.close()
            reason = "timed out" if isinstance(exc, asyncio.TimeoutError) else str(exc)
            self.last_error = reason
            self._set_state(ConnectionState.ERROR)
            logger.error("MongoDB connection failed: %s", reason, extra={"generation": generation})
            raise DatabaseConnectionError(f"Could not connect to MongoDB: {reason}") from exc

        self._client = client
        self._db = db
        self.last_error = None
        self._set_state(ConnectionState.CONNECTED)
        logger.info("Connected to MongoDB", extra={"db_name": db.name, "generation": generation})
        return db

    async def _ensure_indexes(self, collection: AsyncIOMotorCollection) -> None:
        try:
            await collection.create_index([("createdAt", DESCENDING)], name="createdAt_desc")
            if self.settings.unique_email:
                await collection.create_index([("email", ASCENDING)], name="email_unique", unique=True)
        except OperationFailure as exc:
            # e.g. existing duplicates block the unique index; reads and writes still work
            logger.error("MongoDB index creation failed: %s", exc, extra={"collection": self.settings.collection})

    def _on_topology_change(self, generation: int, writable: bool) -> None:
        if generation != self._generation:
            return
        if self._state is ConnectionState.CONNECTED and not writable:
            self.last_error = "no writable server"
            self._set_state(ConnectionState.ERROR)
            logger.warning("MongoDB disconnected", extra={"generation": generation})
        elif self._state is ConnectionState.ERROR and writable and self._client is not None:
            self.last_error = None
            self._set_state(ConnectionState.CONNECTED)
            logger.info("MongoDB reconnected", extra={"generation": generation})

    def _set_state(self, state: ConnectionState) -> None:
        if state is not self._state:
            logger.debug("MongoDB state %s -> %s", self._state.value, state.value)
            self._state = state

    async def _close_client(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._db = None

    async def dispose(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        await self._close_client()
        self._generation += 1
        self._set_state(ConnectionState.DISCONNECTED)
