"""
MongoDB connection management
"""

from typing import Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import monitoring
from pymongo.errors import PyMongoError

from wifi_portal.core.config import settings

logger = structlog.get_logger(__name__)


class ConnectionState(monitoring.ServerHeartbeatListener):
    """
    Tracks whether MongoDB is reachable right now.

    Fed by the driver's server heartbeats, so the flag follows the server
    going away and coming back without any request having to fail first.
    Each server's last heartbeat is kept separately; the backend counts as
    connected while any member of the deployment answers.
    """

    def __init__(self):
        self.connected = False
        self.servers = {}

    def mark(self, connected: bool):
        if connected != self.connected:
            logger.info("MongoDB connectivity changed", connected=connected)
        self.connected = connected

    def record(self, address, reachable: bool):
        self.servers[address] = reachable
        self.mark(any(self.servers.values()))

    def reset(self):
        self.servers.clear()
        self.mark(False)

    def started(self, event):
        pass

    def succeeded(self, event):
        self.record(event.connection_id, True)

    def failed(self, event):
        self.record(event.connection_id, False)


class MongoDB:
    """Holds the motor client and the visitor collection"""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.state = ConnectionState()

    @property
    def available(self) -> bool:
        return self.client is not None and self.state.connected

    def collection(self) -> AsyncIOMotorCollection:
        return self.client[settings.MONGODB_DATABASE][settings.MONGODB_COLLECTION]

    async def connect(self) -> bool:
        """Create the client and ping the server once"""
        if not settings.MONGODB_ENABLED:
            logger.warning("⚠️ MongoDB disabled, using in-memory storage")
            return False

        self.client = AsyncIOMotorClient(
            settings.MONGODB_URI,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
            tz_aware=True,
            event_listeners=[self.state],
        )
        try:
            await self.client.admin.command("ping")
            self.state.mark(True)
            logger.info("✅ MongoDB connected", database=settings.MONGODB_DATABASE)
            return True
        except PyMongoError as e:
            # The client keeps monitoring; storage switches over once a heartbeat succeeds.
            self.state.mark(False)
            logger.warning("⚠️ MongoDB not reachable, using in-memory storage", err=str(e))
            return False

    def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None
            self.state.reset()
            logger.info("MongoDB connection closed")


mongodb = MongoDB()


async def init_db() -> bool:
    """Initialize database connection"""
    return await mongodb.connect()


def close_db():
    mongodb.close()
