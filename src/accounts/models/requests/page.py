from .serde_base import SerdeBase


class PageResponse[T](SerdeBase):
    page_number: int
    page_size: int
    count: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool
    data: list[T]
