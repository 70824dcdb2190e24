"""Tests for page window and navigation flags."""

import pytest

from gunpla_catalog.services.pagination import (
    MAX_SKIP,
    PageWindow,
    max_page_number,
    paginate,
    parse_page_number,
)


class TestParsePageNumber:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 1),
            ("", 1),
            ("abc", 1),
            ("0", 1),
            ("-3", 1),
            ("1", 1),
            ("3", 3),
            (" 4", 4),
            ("2.7", 2),
            ("5abc", 5),
        ],
    )
    def test_coercion(self, raw, expected):
        assert parse_page_number(raw) == expected


class TestPageWindow:
    def test_first_page(self):
        window = paginate("1", 10)
        assert window.skip == 0
        assert window.limit == 10
        assert window.has_next(25) is True
        assert window.has_previous() is False

    def test_last_partial_page(self):
        window = paginate("3", 10)
        assert window.skip == 20
        assert window.has_next(25) is False
        assert window.has_previous() is True

    def test_exact_multiple_has_no_next(self):
        assert PageWindow(page_number=2, page_size=10).has_next(20) is False

    def test_empty_result(self):
        window = paginate(None)
        assert window.page_number == 1
        assert window.has_next(0) is False
        assert window.has_previous() is False

    def test_page_past_the_end(self):
        window = paginate("9", 10)
        assert window.skip == 80
        assert window.has_next(25) is False
        assert window.has_previous() is True


class TestPageBounds:
    @pytest.mark.parametrize("raw", ["99999999999999999999", "9" * 10000, "922337203685477581"])
    def test_skip_fits_int64(self, raw):
        window = paginate(raw, 10)
        assert window.page_number == max_page_number(10)
        assert 0 <= window.skip <= MAX_SKIP

    def test_last_representable_page_is_kept(self):
        last = max_page_number(10)
        assert paginate(str(last), 10).page_number == last
        assert paginate(str(last - 1), 10).page_number == last - 1

    def test_leading_zeros(self):
        assert parse_page_number("0003") == 3
        assert parse_page_number("+2") == 2
