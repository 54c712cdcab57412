"""
Unit tests for the pagination and sorting helpers.
"""

import pytest

from synergysphere.enums import SortOrder
from synergysphere.models import Task
from synergysphere.utils.pagination import (
    PageParams, build_page, paginate, parse_pagination, resolve_order, resolve_sort,
)


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (None, None, (1, 20)),
        ("3", "10", (3, 10)),
        ("0", "0", (1, 20)),
        ("-2", "-5", (1, 20)),
        ("abc", "xyz", (1, 20)),
        ("2", "500", (2, 100)),
        ("2.9", "15.2", (2, 15)),
    ],
)
def test_parse_pagination(page, limit, expected):
    params = parse_pagination(page, limit)
    assert (params.page, params.limit) == expected


def test_offset():
    assert PageParams(page=1, limit=20).offset == 0
    assert PageParams(page=4, limit=25).offset == 75


def test_build_page_empty():
    page = build_page([], PageParams(page=1, limit=20), 0)
    assert page == {
        "items": [],
        "page": 1,
        "limit": 20,
        "total": 0,
        "totalPages": 1,
        "hasPrev": False,
        "hasNext": False,
    }


def test_build_page_middle_and_last():
    middle = build_page(["x"], PageParams(page=2, limit=20), 45)
    assert middle["totalPages"] == 3
    assert middle["hasPrev"] is True
    assert middle["hasNext"] is True

    last = build_page(["x"], PageParams(page=3, limit=20), 45)
    assert last["hasNext"] is False


def test_build_page_past_the_end_is_not_clamped():
    page = build_page([], PageParams(page=9, limit=20), 45)
    assert page["page"] == 9
    assert page["items"] == []
    assert page["hasPrev"] is True
    assert page["hasNext"] is False


def test_resolve_sort_uses_allow_list():
    allowed = {"created_at": Task.created_at, "title": Task.title}
    assert resolve_sort("title", allowed, "created_at") is Task.title
    assert resolve_sort("password_hash", allowed, "created_at") is Task.created_at
    assert resolve_sort(None, allowed, "created_at") is Task.created_at


def test_resolve_order():
    assert resolve_order("ASC") == SortOrder.ASC
    assert resolve_order(" desc ") == SortOrder.DESC
    assert resolve_order("sideways") == SortOrder.DESC
    assert resolve_order(None, SortOrder.ASC) == SortOrder.ASC


class CountOnlyQuery:
    """Stands in for a Query whose page fetch must not run."""

    def __init__(self, total):
        self.total = total

    def order_by(self, *clauses):
        return self

    def count(self):
        return self.total

    def offset(self, offset):
        raise AssertionError(f"page query issued with offset {offset}")


def test_paginate_past_the_end_skips_page_query():
    page = paginate(CountOnlyQuery(5), PageParams(page=10 ** 20, limit=20))
    assert page["items"] == []
    assert page["page"] == 10 ** 20
    assert page["total"] == 5
    assert page["hasNext"] is False
