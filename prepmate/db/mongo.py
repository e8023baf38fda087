# prepmate/db/mongo.py
import logging
from typing import Optional

import motor.motor_asyncio as motor_asyncio
from pymongo import ASCENDING, DESCENDING

from prepmate.core.config import settings

logger = logging.getLogger(__name__)

_mongo_client: Optional[motor_asyncio.AsyncIOMotorClient] = None

def get_mongo_client():
    """
    Returns a cached Motor client.
    """
    global _mongo_client
    if _mongo_client is None:
        _mongo_client = motor_asyncio.AsyncIOMotorClient(settings.MONGODB_URI)
    return _mongo_client

def get_db():
    client = get_mongo_client()
    return client[settings.MONGODB_DB]

async def init_db():
    """
    Create the indexes the repositories rely on for uniqueness and lookups.
    """
    db = get_db()
    await db["users"].create_index([("email", ASCENDING)], unique=True)
    await db["saved_resources"].create_index(
        [("user_id", ASCENDING), ("link", ASCENDING)], unique=True
    )
    await db["user_progress"].create_index(
        [("user_id", ASCENDING), ("skill_name", ASCENDING), ("resource_link", ASCENDING)],
        unique=True,
    )
    await db["llm_logs"].create_index([("user_id", ASCENDING), ("timestamp", DESCENDING)])
    await db["llm_logs"].create_index([("endpoint", ASCENDING), ("timestamp", DESCENDING)])
    logger.info("MongoDB indexes ensured on %s", settings.MONGODB_DB)

def close_db():
    global _mongo_client
    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None
