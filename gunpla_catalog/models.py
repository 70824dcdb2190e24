from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SortKey(str, Enum):
    NAME = "name"
    GRADE = "grade"
    PRICE = "price"
    DATE = "date"
    PROVINCE = "province"


class ListingOut(BaseModel):
    id: str
    modelName: Optional[str] = None
    modelGrade: Optional[str] = None
    price: Optional[Decimal] = None
    province: Optional[str] = None
    timestamp: Optional[datetime] = None


class SortOut(BaseModel):
    field: str
    direction: str


class ListingPage(BaseModel):
    status_code: int = Field(200, exclude=True)

    message: str
    totalMatching: int
    listings: List[ListingOut]
    pageNumber: int
    pageSize: int
    hasNext: bool
    hasPrevious: bool
    appliedFilter: Dict[str, Any]
    sort: List[SortOut]
    queryString: str = ""


class ListingFailure(BaseModel):
    status_code: int = Field(500, exclude=True)

    errorMessage: str
    listings: List[ListingOut] = []
    pageNumber: Optional[int] = None
    hasNext: Optional[bool] = None
    hasPrevious: Optional[bool] = None
    appliedFilter: Optional[Dict[str, Any]] = None


class FieldCount(BaseModel):
    key: Any = None
    count: int


class IndexEntry(BaseModel):
    modelName: str
    totalEntries: int


class GroupedIndex(BaseModel):
    status_code: int = Field(200, exclude=True)

    message: str
    empty: bool = False
    # None (with empty=True) when the collection holds no listings at all
    groupedListings: Optional[Dict[str, List[IndexEntry]]] = None


class IndexFailure(BaseModel):
    status_code: int = Field(500, exclude=True)

    errorMessage: str
