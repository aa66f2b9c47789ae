"""
Listing query building.

``build_query`` turns the ``search`` and ``sort`` request parameters into a
store-agnostic ``QuerySpec``; ``paginate`` derives the page window and the
navigation flags from a record count.

search: ``column:value``, case-insensitive substring match on one column.
        Anything malformed (no colon, empty column or value, a column that
        may not be searched) means no filter at all.
sort:   ``field:direction``, ``desc`` sorts descending, anything else
        ascending. Unknown or empty fields sort by the default key.
"""

import math
from collections.abc import Collection
from dataclasses import dataclass

DEFAULT_SORT_KEY = "email"


@dataclass(frozen=True)
class SearchFilter:
    column: str
    value: str


@dataclass(frozen=True)
class QuerySpec:
    filter: SearchFilter | None
    sort_key: str
    descending: bool


@dataclass(frozen=True)
class Page:
    page_number: int
    page_size: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool
    skip: int


def parse_search(search: str | None, searchable: Collection[str]) -> SearchFilter | None:
    if not search:
        return None

    column, sep, value = search.partition(":")
    if not sep or not column or not value:
        return None
    if column not in searchable:
        return None

    return SearchFilter(column=column, value=value)


def parse_sort(
    sort: str | None,
    sortable: Collection[str],
    default_key: str = DEFAULT_SORT_KEY,
) -> tuple[str, bool]:
    if not sort:
        return default_key, False

    field, _, direction = sort.partition(":")
    if field not in sortable:
        field = default_key

    return field, direction == "desc"


def build_query(
    search: str | None,
    sort: str | None,
    searchable: Collection[str],
    sortable: Collection[str],
    default_sort_key: str = DEFAULT_SORT_KEY,
) -> QuerySpec:
    sort_key, descending = parse_sort(sort, sortable, default_sort_key)
    return QuerySpec(
        filter=parse_search(search, searchable),
        sort_key=sort_key,
        descending=descending,
    )


def paginate(count: int, page_number: int, page_size: int) -> Page:
    total_pages = math.ceil(count / page_size)
    return Page(
        page_number=page_number,
        page_size=page_size,
        total_pages=total_pages,
        has_previous_page=page_number > 1,
        has_next_page=page_number < total_pages,
        skip=(page_number - 1) * page_size,
    )
