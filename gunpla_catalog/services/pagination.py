import re
from dataclasses import dataclass
from typing import Optional

DEFAULT_PAGE_SIZE = 10

# skip goes over the wire as a BSON int64
MAX_SKIP = 2 ** 63 - 1

_LEADING_INT = re.compile(r"\s*([+-]?)(\d+)")


@dataclass(frozen=True)
class PageWindow:
    page_number: int
    page_size: int

    @property
    def skip(self) -> int:
        return (self.page_number - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    def has_next(self, total_matching: int) -> bool:
        return self.page_number * self.page_size < total_matching

    def has_previous(self) -> bool:
        return self.page_number > 1


def max_page_number(page_size: int) -> int:
    return MAX_SKIP // page_size + 1


def parse_page_number(raw: Optional[str], page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Leading integer of ``raw``; anything unusable or below 1 is page 1.

    ``"3"`` -> 3, ``"2.7"`` -> 2, ``"4abc"`` -> 4, ``"-2"``/``"0"``/``"x"`` -> 1.
    Pages whose skip would not fit in int64 are clamped to the last one that does.
    """
    if raw is None:
        return 1
    match = _LEADING_INT.match(str(raw))
    if not match:
        return 1
    sign, digits = match.groups()
    digits = digits.lstrip("0")
    if sign == "-" or not digits:
        return 1
    ceiling = max_page_number(page_size)
    # compare lengths first so a huge digit run is never converted to int
    if len(digits) > len(str(ceiling)):
        return ceiling
    return min(int(digits), ceiling)


def paginate(page_param: Optional[str], page_size: int = DEFAULT_PAGE_SIZE) -> PageWindow:
    return PageWindow(
        page_number=parse_page_number(page_param, page_size),
        page_size=page_size,
    )
