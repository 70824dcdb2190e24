"""Alphabetical index of distinct model names with per-name counts."""

import logging
from typing import Dict, Iterable, List

from gunpla_catalog.core.errors import StoreError
from gunpla_catalog.models import FieldCount, GroupedIndex, IndexEntry, IndexFailure
from gunpla_catalog.services.store import ListingStore

logger = logging.getLogger(__name__)

GROUP_FIELD = "modelName"
NO_ENTRIES_MESSAGE = "No Entries"
STORE_FAILURE_MESSAGE = "Unable to load the model index, please try again later"


def group_by_initial(counts: Iterable[FieldCount]) -> Dict[str, List[IndexEntry]]:
    """Fold name counts into letter groups, keeping the incoming order.

    The key is the stored name's first character uppercased as-is, so
    ``"zeta"`` lands under ``"Z"`` next to ``"Zaku"``.
    """
    grouped: Dict[str, List[IndexEntry]] = {}
    for item in counts:
        name = item.key
        # "ß".upper() is "SS"; the key stays one character
        grouped.setdefault(name[:1].upper()[:1], []).append(
            IndexEntry(modelName=name, totalEntries=item.count)
        )
    return grouped


class GroupedIndexHandler:
    def __init__(self, store: ListingStore) -> None:
        self.store = store

    async def handle(self) -> GroupedIndex | IndexFailure:
        try:
            total = await self.store.count_matching({})
            if total == 0:
                return GroupedIndex(message=NO_ENTRIES_MESSAGE, empty=True, groupedListings=None)
            counts = await self.store.group_by_field(GROUP_FIELD)
        except StoreError as e:
            logger.exception("[index] store failure: %s %s", e.message, e.details)
            return IndexFailure(errorMessage=STORE_FAILURE_MESSAGE)

        named = []
        for item in counts:
            if isinstance(item.key, str):
                named.append(item)
            else:
                logger.warning("[index] skipping %d listings without a usable %s", item.count, GROUP_FIELD)

        # group output order is not guaranteed by the store
        named.sort(key=lambda item: item.key)

        return GroupedIndex(
            message=f"{total} Total Entries",
            groupedListings=group_by_initial(named),
        )
