from motor.motor_asyncio import AsyncIOMotorClient
from .config import settings

client = AsyncIOMotorClient(
    settings.mongo_uri,
    serverSelectionTimeoutMS=settings.mongo_timeout_ms,
    socketTimeoutMS=settings.mongo_timeout_ms,
)
db = client[settings.mongo_db]

listings_coll = db[settings.listings_collection]
