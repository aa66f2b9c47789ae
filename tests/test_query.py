import pytest

from accounts.core import SearchFilter, build_query, paginate

COLUMNS = ("name", "email")


def test_paginate_last_partial_page():
    page = paginate(count=23, page_number=3, page_size=10)

    assert page.total_pages == 3
    assert page.has_previous_page
    assert not page.has_next_page
    assert page.skip == 20


def test_paginate_empty_collection():
    page = paginate(count=0, page_number=1, page_size=10)

    assert page.total_pages == 0
    assert not page.has_previous_page
    assert not page.has_next_page
    assert page.skip == 0


def test_paginate_first_page_of_many():
    page = paginate(count=25, page_number=1, page_size=10)

    assert page.total_pages == 3
    assert not page.has_previous_page
    assert page.has_next_page


def test_paginate_out_of_range_page():
    page = paginate(count=5, page_number=7, page_size=10)

    assert page.total_pages == 1
    assert page.has_previous_page
    assert not page.has_next_page
    assert page.skip == 60


def test_search_on_one_column():
    query = build_query("email:bob", None, COLUMNS, COLUMNS)
    assert query.filter == SearchFilter(column="email", value="bob")


def test_search_splits_on_first_colon_only():
    query = build_query("name:a:b", None, COLUMNS, COLUMNS)
    assert query.filter == SearchFilter(column="name", value="a:b")


@pytest.mark.parametrize(
    "search", [None, "", "bob", "email:", ":bob", "password:secret", "unknown:x"]
)
def test_malformed_search_is_unfiltered(search):
    assert build_query(search, None, COLUMNS, COLUMNS).filter is None


def test_default_sort_is_email_ascending():
    query = build_query(None, None, COLUMNS, COLUMNS)
    assert (query.sort_key, query.descending) == ("email", False)


@pytest.mark.parametrize(
    "sort, expected",
    [
        ("name:desc", ("name", True)),
        ("name:asc", ("name", False)),
        ("name", ("name", False)),
        ("name:DESC", ("name", False)),
        ("email:sideways", ("email", False)),
        (":desc", ("email", True)),
        ("password:desc", ("email", True)),
    ],
)
def test_sort_parsing(sort, expected):
    query = build_query(None, sort, COLUMNS, COLUMNS)
    assert (query.sort_key, query.descending) == expected
