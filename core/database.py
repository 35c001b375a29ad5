import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from core import config
from core.errors import StoreError

logger = logging.getLogger(__name__)

# 프로세스 전체에서 한 번만 연결하고 재사용
_client: Optional[AsyncIOMotorClient] = None


def get_database() -> AsyncIOMotorDatabase:
    global _client

    if not config.MONGO_URL:
        raise StoreError("MONGO_URL is not set")
    if not config.DB_NAME:
        raise StoreError("DB_NAME is not set")

    if _client is None:
        logger.info("Connecting to MongoDB database '%s'", config.DB_NAME)
        _client = AsyncIOMotorClient(config.MONGO_URL)
    return _client[config.DB_NAME]


def get_solution_collection():
    #await 붙여야함 - 비동기 실행
    return get_database()[config.SOLUTION_COLLECTION]
