"""Lazy, forward-only sequence of response pages."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable, Iterator
from typing import Generic, TypeVar, cast

from sdkruntime.errors import PaginationExhaustedError

logger = py_logging.getLogger(__name__)

PageT = TypeVar("PageT")

NextPageFetcher = Callable[[PageT], PageT | None]


class PageCursor(Generic[PageT]):
    """Single traversal over a PageSequence.

    The next page is fetched only when a caller asks whether one exists (or
    asks for it), never while the previous page is still being consumed.
    A fetch that raises leaves the cursor where it was, so asking again
    repeats the fetch.
    """

    def __init__(self, first_page: PageT | None, fetch_next_page: NextPageFetcher[PageT]) -> None:
        self._fetch_next_page = fetch_next_page
        self._pending: PageT | None = first_page
        self._last: PageT | None = None
        self._resolved = True
        self.pages_fetched = 0

    def has_next(self) -> bool:
        if not self._resolved:
            pending = None if self._last is None else self._fetch_next_page(self._last)
            self._pending = pending
            self._resolved = True
            if pending is not None:
                self.pages_fetched += 1
                logger.debug("Fetched page %s", self.pages_fetched + 1)
        return self._pending is not None

    def next(self) -> PageT:
        if not self.has_next():
            raise PaginationExhaustedError("No more pages.")
        page = cast(PageT, self._pending)
        self._last = page
        self._pending = None
        self._resolved = False
        return page

    def __iter__(self) -> Iterator[PageT]:
        return self

    def __next__(self) -> PageT:
        return self.next()


class PageSequence(Generic[PageT]):
    """Pages of one logical paginated call, starting from an already-fetched first page.

    Every iteration starts again from the first page and re-issues the same
    network calls.
    """

    def __init__(self, first_page: PageT | None, fetch_next_page: NextPageFetcher[PageT]) -> None:
        self._first_page = first_page
        self._fetch_next_page = fetch_next_page

    @property
    def first_page(self) -> PageT | None:
        return self._first_page

    def cursor(self) -> PageCursor[PageT]:
        return PageCursor(self._first_page, self._fetch_next_page)

    def __iter__(self) -> Iterator[PageT]:
        return self.cursor()
