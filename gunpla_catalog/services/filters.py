"""Filter builder: raw query-string values to a MongoDB query document.

Every incoming value is text, even when the form field is a number or a
date, so all parsing and all validation happens here. Absent (or empty)
fields add no constraint; contradictory ranges raise ``ValidationError``.
"""

import re
from datetime import datetime, timezone
from decimal import Decimal, DecimalException, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from bson.decimal128 import Decimal128

from gunpla_catalog.core.errors import ValidationError

DEFAULT_OPEN_PRICE_CEILING = 1010

# stored names may or may not keep these, so each one is optional in the match
QUOTE_CHARS = "\"'“”‘’"
OPTIONAL_QUOTE = f"(?:[{QUOTE_CHARS}])?"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def build_filter(
    params: Mapping[str, str],
    open_price_ceiling: int = DEFAULT_OPEN_PRICE_CEILING,
) -> Dict[str, Any]:
    query: Dict[str, Any] = {}

    start_date, end_date = params.get("startDate"), params.get("endDate")
    if start_date and end_date:
        start = _parse_instant("startDate", start_date)
        end = _parse_instant("endDate", end_date)
        if start > end:
            raise ValidationError("startDate greater than endDate")
        query["timestamp"] = {"$gte": start, "$lte": end}

    model_name = params.get("modelName")
    if model_name and model_name.strip():
        query["modelName"] = {"$regex": name_pattern(model_name), "$options": "i"}

    model_grade = params.get("modelGrade")
    if model_grade:
        query["modelGrade"] = model_grade

    min_price, max_price = params.get("minPrice"), params.get("maxPrice")
    if min_price and max_price:
        query["price"] = _price_range(min_price, max_price, open_price_ceiling)

    province = params.get("province")
    if province:
        query["province"] = province

    return query


def name_pattern(term: str) -> str:
    """Case-insensitive whole-word pattern; every character of ``term`` is literal."""
    body = "".join(
        OPTIONAL_QUOTE if ch in QUOTE_CHARS else re.escape(ch)
        for ch in term.strip()
    )
    return rf"(^|\s){body}(\s|$)"


def _parse_instant(field: str, raw: str) -> datetime:
    try:
        value = datetime.fromisoformat(raw.strip())
    except ValueError:
        raise ValidationError(f"Invalid {field}", details={field: raw})
    # stored timestamps are naive UTC
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _parse_price(field: str, raw: str) -> Decimal:
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise ValidationError(f"Invalid {field}", details={field: raw})
    if not value.is_finite():
        raise ValidationError(f"Invalid {field}", details={field: raw})
    return value


def _to_decimal128(field: str, value: Decimal) -> Decimal128:
    try:
        return Decimal128(value)
    except (DecimalException, ValueError):
        raise ValidationError(f"Invalid {field}", details={field: str(value)})


def _whole_units(raw: str) -> Optional[Decimal]:
    """Leading integer of ``raw`` (``"1e4"`` -> 1, ``"20.9"`` -> 20), None without one.

    Kept as a Decimal so an arbitrarily long digit run never becomes a Python int.
    """
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    return Decimal(match.group(1))


def _price_range(raw_min: str, raw_max: str, open_price_ceiling: int) -> Dict[str, Decimal128]:
    low = _parse_price("minPrice", raw_min)
    high = _parse_price("maxPrice", raw_max)

    # the ceiling and inversion checks look at the leading integer only;
    # the stored bounds keep the exact decimals
    low_units, high_units = _whole_units(raw_min), _whole_units(raw_max)
    if high_units is not None and high_units >= open_price_ceiling:
        return {"$gte": _to_decimal128("minPrice", low)}
    if low_units is not None and high_units is not None and low_units > high_units:
        raise ValidationError("minPrice is greater than maxPrice")
    return {
        "$gte": _to_decimal128("minPrice", low),
        "$lte": _to_decimal128("maxPrice", high),
    }


def describe_filter(query: Mapping[str, Any]) -> Optional[str]:
    """Short field list for log lines."""
    return ",".join(sorted(query)) or None
