"""Pagination: page parsing and meta block."""

import pytest

from community_api.core.pagination import PAGE_SIZE, PageRequest, page_meta, parse_page


@pytest.mark.parametrize("raw, expected", [
    (None, 1), ("", 1), ("abc", 1), ("0", 1), ("3", 3), (2, 2),
])
def test_parse_page(raw, expected):
    assert parse_page(raw).page == expected


def test_offset_for_first_and_later_pages():
    assert PageRequest(1).offset == 0
    assert PageRequest(3).offset == 2 * PAGE_SIZE
    assert PageRequest(-4).offset == 0


def test_meta_counts_pages_with_ceiling():
    assert page_meta(21, PageRequest(2)) == {"total": 21, "pages": 3, "page": 2}


def test_meta_empty_collection():
    assert page_meta(0, PageRequest(1)) == {"total": 0, "pages": 0, "page": 1}


def test_meta_clamps_negative_page():
    assert page_meta(5, PageRequest(-2))["page"] == 1


@pytest.mark.parametrize("raw, expected", [
    ("2.5", 2), ("1e1", 10), ("nan", 1), ("inf", 1), ("-inf", 1),
])
def test_parse_page_reads_number_literals(raw, expected):
    assert parse_page(raw).page == expected
