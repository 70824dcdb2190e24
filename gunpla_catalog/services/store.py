import logging
from typing import Any, Dict, List, Optional, Protocol

from motor.motor_asyncio import AsyncIOMotorCollection
from bson.errors import BSONError
from pymongo.errors import PyMongoError

from gunpla_catalog.core.errors import StoreError
from gunpla_catalog.models import FieldCount

logger = logging.getLogger(__name__)

# driver failures plus queries the driver cannot encode (e.g. an int past int64)
DRIVER_ERRORS = (PyMongoError, BSONError, OverflowError)


class ListingStore(Protocol):
    async def find_matching(
        self, query: Dict[str, Any], sort: List[tuple], skip: int, limit: int
    ) -> List[Dict[str, Any]]: ...

    async def count_matching(self, query: Dict[str, Any]) -> int: ...

    async def group_by_field(self, field: str) -> List[FieldCount]: ...

    async def ping(self) -> bool: ...


class MongoListingStore:
    """Read-only access to the listings collection.

    Driver failures surface as ``StoreError``; nothing is retried here.
    ``group_by_field`` makes no ordering promise, callers sort.
    """

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self._coll = collection

    async def find_matching(self, query, sort, skip, limit):
        try:
            cursor = self._coll.find(query).sort(sort).skip(skip).limit(limit)
            return await cursor.to_list(length=limit)
        except DRIVER_ERRORS as e:
            raise StoreError("find failed", details={"collection": self._coll.name}) from e

    async def count_matching(self, query):
        try:
            return await self._coll.count_documents(query)
        except DRIVER_ERRORS as e:
            raise StoreError("count failed", details={"collection": self._coll.name}) from e

    async def group_by_field(self, field):
        pipeline = [{"$group": {"_id": f"${field}", "totalEntry": {"$sum": 1}}}]
        try:
            docs = await self._coll.aggregate(pipeline).to_list(length=None)
        except DRIVER_ERRORS as e:
            raise StoreError("aggregate failed", details={"collection": self._coll.name}) from e
        return [FieldCount(key=d["_id"], count=d["totalEntry"]) for d in docs]

    async def ping(self):
        try:
            await self._coll.database.command("ping")
        except PyMongoError as e:
            logger.warning("[store] ping failed: %s", e)
            return False
        return True


_listing_store: Optional[MongoListingStore] = None


def get_listing_store() -> ListingStore:
    global _listing_store
    if _listing_store is None:
        from gunpla_catalog.core.db import listings_coll
        _listing_store = MongoListingStore(listings_coll)
    return _listing_store
