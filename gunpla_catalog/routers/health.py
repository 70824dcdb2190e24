from fastapi import APIRouter, Depends

from gunpla_catalog.services.store import ListingStore, get_listing_store

router = APIRouter(prefix="/api/v1/health", tags=["health"])

@router.get("")
async def health(store: ListingStore = Depends(get_listing_store)):
    return {"status": "ok", "store": "up" if await store.ping() else "down"}
