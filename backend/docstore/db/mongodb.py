import logging
from typing import Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from docstore.core.config import settings

logger = logging.getLogger(__name__)

# Resolves a database name to a handle; injected into DocumentStore
ConnectionProvider = Callable[[Optional[str]], AsyncIOMotorDatabase]


class Database:
    client: AsyncIOMotorClient = None


db = Database()


def _create_client(url: Optional[str] = None) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(
        url or settings.MONGODB_URL,
        maxPoolSize=settings.MONGODB_MAX_POOL_SIZE,
        serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
    )


def get_connection(database: Optional[str] = None) -> AsyncIOMotorDatabase:
    """Return the handle for `database`, connecting on first use."""
    if db.client is None:
        db.client = _create_client()
        logger.info("Connected to MongoDB (lazy)")
    return db.client[database or settings.DATABASE_NAME]


async def get_database() -> AsyncIOMotorDatabase:
    return get_connection()


async def connect_to_mongo(url: Optional[str] = None):
    if db.client is not None:
        return
    db.client = _create_client(url)
    logger.info("Connected to MongoDB")


async def close_mongo_connection():
    if db.client is not None:
        db.client.close()
        db.client = None
        logger.info("Closed MongoDB connection")


async def ping() -> bool:
    """Readiness check. Never raises; unreachable servers report False."""
    if db.client is None:
        return False
    try:
        await db.client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning(f"MongoDB ping failed: {e}")
        return False
