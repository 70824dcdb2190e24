"""Listing search: filter, sort and page one request's worth of listings."""

import asyncio
import json
import logging
from typing import Any, Dict, List, Mapping, Tuple
from urllib.parse import urlencode

from bson import json_util

from gunpla_catalog.core.errors import StoreError, ValidationError
from gunpla_catalog.models import ListingFailure, ListingOut, ListingPage, SortOut
from gunpla_catalog.services.filters import (
    DEFAULT_OPEN_PRICE_CEILING,
    build_filter,
    describe_filter,
)
from gunpla_catalog.services.pagination import DEFAULT_PAGE_SIZE, PageWindow, paginate
from gunpla_catalog.services.sorting import direction_name, resolve_sort
from gunpla_catalog.services.store import ListingStore

logger = logging.getLogger(__name__)

STORE_FAILURE_MESSAGE = "Unable to load listings, please try again later"


def _listing_out(doc: Mapping[str, Any]) -> ListingOut:
    price = doc.get("price")
    if price is not None and hasattr(price, "to_decimal"):
        price = price.to_decimal()
    return ListingOut(
        id=str(doc["_id"]),
        modelName=doc.get("modelName"),
        modelGrade=doc.get("modelGrade"),
        price=price,
        province=doc.get("province"),
        timestamp=doc.get("timestamp"),
    )


def _jsonable_filter(query: Dict[str, Any]) -> Dict[str, Any]:
    # Decimal128 / datetime values as relaxed extended JSON
    return json.loads(json_util.dumps(query, json_options=json_util.RELAXED_JSON_OPTIONS))


def _link_query_string(params: Mapping[str, str]) -> str:
    return urlencode([(k, v) for k, v in params.items() if k != "page"])


class ListingQueryHandler:
    def __init__(
        self,
        store: ListingStore,
        page_size: int = DEFAULT_PAGE_SIZE,
        open_price_ceiling: int = DEFAULT_OPEN_PRICE_CEILING,
    ) -> None:
        self.store = store
        self.page_size = page_size
        self.open_price_ceiling = open_price_ceiling

    async def _fetch(self, query, sort, window: PageWindow) -> Tuple[List[Dict[str, Any]], int]:
        # the count runs on the full filter, not on the page that comes back;
        # a failure in either call cancels the other
        failure = None
        try:
            async with asyncio.TaskGroup() as tg:
                find = tg.create_task(
                    self.store.find_matching(query, sort, window.skip, window.limit)
                )
                count = tg.create_task(self.store.count_matching(query))
        except* StoreError as group:
            failure = group.exceptions[0]
        if failure is not None:
            raise failure
        return find.result(), count.result()

    async def handle(self, params: Mapping[str, str]) -> ListingPage | ListingFailure:
        try:
            query = build_filter(params, open_price_ceiling=self.open_price_ceiling)
        except ValidationError as e:
            logger.info("[search] rejected filter: %s %s", e.message, e.details)
            return ListingFailure(status_code=400, errorMessage=e.message)

        sort = resolve_sort(params.get("sortBy"), params.get("sortOrder"))
        window = paginate(params.get("page"), self.page_size)

        try:
            docs, total = await self._fetch(query, sort, window)
        except StoreError as e:
            logger.exception("[search] store failure: %s %s", e.message, e.details)
            return ListingFailure(status_code=500, errorMessage=STORE_FAILURE_MESSAGE)

        logger.info(
            "[search] fields=%s sort=%s page=%d total=%d",
            describe_filter(query), sort, window.page_number, total,
        )

        return ListingPage(
            message=f"Search Results: {total} Total listings",
            totalMatching=total,
            listings=[_listing_out(d) for d in docs],
            pageNumber=window.page_number,
            pageSize=window.page_size,
            hasNext=window.has_next(total),
            hasPrevious=window.has_previous(),
            appliedFilter=_jsonable_filter(query),
            sort=[SortOut(field=f, direction=direction_name(d)) for f, d in sort],
            queryString=_link_query_string(params),
        )
