"""TaskFilters, PageRequest and Page."""

from datetime import date

import pytest

from taskhub.application.dtos import Page, PageRequest, TaskFilters
from taskhub.domain.exceptions import ValidationException


def test_page_request_defaults() -> None:
    page = PageRequest()
    assert (page.page, page.size, page.sort, page.descending) == (0, 20, "updated_at", True)
    assert PageRequest(page=3, size=10).offset == 30


@pytest.mark.parametrize(
    ("kwargs", "field"),
    [
        ({"page": -1}, "page"),
        ({"size": 0}, "size"),
        ({"sort": "assignee"}, "sort"),
    ],
)
def test_page_request_rejects_invalid(kwargs, field) -> None:
    with pytest.raises(ValidationException) as exc_info:
        PageRequest(**kwargs)
    assert exc_info.value.details == {"field": field}


def test_filters_reject_inverted_due_range() -> None:
    with pytest.raises(ValidationException):
        TaskFilters(due_from=date(2025, 2, 1), due_to=date(2025, 1, 1))


def test_page_total_pages_and_map() -> None:
    page = Page(items=[1, 2], total=5, page=0, size=2)
    assert page.total_pages == 3
    mapped = page.map(str)
    assert mapped.items == ["1", "2"]
    assert mapped.total == 5
    assert Page(items=[], total=0, page=0, size=20).total_pages == 0
