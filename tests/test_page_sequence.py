from __future__ import annotations

from dataclasses import dataclass

import pytest

from sdkruntime.errors import PaginationExhaustedError
from sdkruntime.pagination.pages import PageSequence


@dataclass(frozen=True)
class Page:
    name: str
    next_token: str | None = None


class FakeService:
    def __init__(self, pages_by_token: dict[str, Page]) -> None:
        self.pages_by_token = pages_by_token
        self.calls: list[str] = []

    def fetch_next(self, page: Page) -> Page | None:
        if page is None or not page.next_token:
            return None
        self.calls.append(page.next_token)
        return self.pages_by_token[page.next_token]


def test_single_page_without_token_yields_one_page() -> None:
    service = FakeService({})
    first = Page("p1")

    assert list(PageSequence(first, service.fetch_next)) == [first]
    assert service.calls == []


def test_two_pages_need_exactly_one_fetch() -> None:
    page2 = Page("p2")
    service = FakeService({"T1": page2})
    page1 = Page("p1", next_token="T1")

    assert list(PageSequence(page1, service.fetch_next)) == [page1, page2]
    assert service.calls == ["T1"]


def test_empty_token_ends_sequence() -> None:
    service = FakeService({})

    assert [page.name for page in PageSequence(Page("p1", next_token=""), service.fetch_next)] == ["p1"]
    assert service.calls == []


def test_next_page_is_not_fetched_until_requested() -> None:
    service = FakeService({"T1": Page("p2", next_token="T2"), "T2": Page("p3")})
    cursor = PageSequence(Page("p1", next_token="T1"), service.fetch_next).cursor()

    assert cursor.next().name == "p1"
    assert service.calls == []
    assert cursor.has_next()
    assert service.calls == ["T1"]
    assert cursor.has_next()
    assert service.calls == ["T1"]
    assert cursor.next().name == "p2"
    assert cursor.next().name == "p3"
    assert service.calls == ["T1", "T2"]
    assert not cursor.has_next()


def test_exhausted_cursor_raises_distinct_error() -> None:
    cursor = PageSequence(Page("p1"), FakeService({}).fetch_next).cursor()
    cursor.next()

    with pytest.raises(PaginationExhaustedError):
        cursor.next()


def test_each_traversal_replays_fetches() -> None:
    service = FakeService({"T1": Page("p2")})
    sequence = PageSequence(Page("p1", next_token="T1"), service.fetch_next)

    first_run = [page.name for page in sequence]
    second_run = [page.name for page in sequence]

    assert first_run == second_run == ["p1", "p2"]
    assert service.calls == ["T1", "T1"]


def test_fetch_errors_propagate_unchanged() -> None:
    failure = ConnectionError("network down")

    def fetch_next(page: Page) -> Page | None:
        raise failure

    cursor = PageSequence(Page("p1", next_token="T1"), fetch_next).cursor()
    cursor.next()

    with pytest.raises(ConnectionError) as exc:
        cursor.next()
    assert exc.value is failure


def test_absent_first_page_is_empty_sequence() -> None:
    assert list(PageSequence(None, FakeService({}).fetch_next)) == []


def test_failed_fetch_is_repeated_on_next_query() -> None:
    page2 = Page("p2")
    calls = {"count": 0}

    def fetch_next(page: Page) -> Page | None:
        calls["count"] += 1
        if calls["count"] == 1:
            raise ConnectionError("network down")
        return page2

    cursor = PageSequence(Page("p1", next_token="T1"), fetch_next).cursor()
    cursor.next()

    with pytest.raises(ConnectionError):
        cursor.has_next()
    assert cursor.has_next()
    assert cursor.next() is page2
    assert calls["count"] == 2
    assert not cursor.has_next()
