from typing import Dict, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

from gunpla_catalog.models import SortKey

SortSpec = List[Tuple[str, int]]

DESCENDING_TOKEN = "desc"

SORT_FIELDS: Dict[SortKey, str] = {
    SortKey.NAME: "modelName",
    SortKey.GRADE: "modelGrade",
    SortKey.PRICE: "price",
    SortKey.DATE: "timestamp",
    SortKey.PROVINCE: "province",
}

# newest first; modelName only breaks ties between equal timestamps
DEFAULT_SORT: SortSpec = [("timestamp", DESCENDING), ("modelName", ASCENDING)]


def resolve_sort(sort_by: Optional[str], sort_order: Optional[str] = None) -> SortSpec:
    """Sort spec for the requested key, or the default for absent/unknown keys."""
    try:
        key = SortKey(sort_by)
    except ValueError:
        return list(DEFAULT_SORT)

    direction = DESCENDING if sort_order == DESCENDING_TOKEN else ASCENDING
    return [(SORT_FIELDS[key], direction)]


def direction_name(direction: int) -> str:
    return "desc" if direction == DESCENDING else "asc"
