# Creates a single Motor client and DB handle from settings. Components never call this themselves:
# scripts build the handle once and pass it to each repository/service constructor.

from typing import Optional

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from mongodb_path.core.settings import settings

_client: AsyncIOMotorClient | None = None

def get_client(uri: Optional[str] = None) -> AsyncIOMotorClient:
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(uri or settings.MONGO_URI)
        logger.debug("Opened MongoDB client for {}", uri or settings.MONGO_URI)
    return _client

def get_db(name: Optional[str] = None) -> AsyncIOMotorDatabase:
    return get_client()[name or settings.MONGO_DB]

def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.debug("Closed MongoDB client")
