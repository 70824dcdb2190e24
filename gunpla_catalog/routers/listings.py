from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from gunpla_catalog.core.config import settings
from gunpla_catalog.services.index import GroupedIndexHandler
from gunpla_catalog.services.listings import ListingQueryHandler
from gunpla_catalog.services.store import ListingStore, get_listing_store

router = APIRouter(prefix="/api/v1/listings", tags=["listings"])


def get_listing_handler(store: ListingStore = Depends(get_listing_store)) -> ListingQueryHandler:
    return ListingQueryHandler(
        store,
        page_size=settings.page_size,
        open_price_ceiling=settings.open_price_ceiling,
    )


def get_index_handler(store: ListingStore = Depends(get_listing_store)) -> GroupedIndexHandler:
    return GroupedIndexHandler(store)


@router.get("")
async def search_listings(request: Request, handler: ListingQueryHandler = Depends(get_listing_handler)):
    result = await handler.handle(dict(request.query_params))
    return JSONResponse(status_code=result.status_code, content=result.model_dump(mode="json"))


@router.get("/index")
async def listings_index(handler: GroupedIndexHandler = Depends(get_index_handler)):
    result = await handler.handle()
    return JSONResponse(status_code=result.status_code, content=result.model_dump(mode="json"))
