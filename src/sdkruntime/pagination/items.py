"""Flattened lazy sequence of the items carried by each page."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

from sdkruntime.errors import PaginationExhaustedError
from sdkruntime.pagination.pages import PageCursor, PageSequence

logger = py_logging.getLogger(__name__)

PageT = TypeVar("PageT")
ItemT = TypeVar("ItemT")

ItemExtractor = Callable[[PageT], Iterable[ItemT] | None]

_EMPTY = object()


class ItemCursor(Generic[PageT, ItemT]):
    """Item-level traversal that moves to the next page only once the current one is drained."""

    def __init__(self, pages: PageCursor[PageT], extract_items: ItemExtractor[PageT, ItemT]) -> None:
        self._pages = pages
        self._extract_items = extract_items
        self._items: Iterator[ItemT] | None = None
        self._lookahead: object = _EMPTY

    def _fill(self) -> bool:
        while self._lookahead is _EMPTY:
            if self._items is not None:
                try:
                    self._lookahead = next(self._items)
                    continue
                except StopIteration:
                    self._items = None
            if not self._pages.has_next():
                return False
            page = self._pages.next()
            extracted = self._extract_items(page)
            if extracted is None:
                logger.debug("Page carried no items")
                continue
            self._items = iter(extracted)
        return True

    def has_next(self) -> bool:
        return self._fill()

    def next(self) -> ItemT:
        if not self._fill():
            raise PaginationExhaustedError("No more items.")
        item = self._lookahead
        self._lookahead = _EMPTY
        return item  # type: ignore[return-value]

    def __iter__(self) -> Iterator[ItemT]:
        return self

    def __next__(self) -> ItemT:
        return self.next()


class ItemSequence(Generic[PageT, ItemT]):
    def __init__(self, pages: PageSequence[PageT], extract_items: ItemExtractor[PageT, ItemT]) -> None:
        self._pages = pages
        self._extract_items = extract_items

    @property
    def pages(self) -> PageSequence[PageT]:
        return self._pages

    def cursor(self) -> ItemCursor[PageT, ItemT]:
        return ItemCursor(self._pages.cursor(), self._extract_items)

    def __iter__(self) -> Iterator[ItemT]:
        return self.cursor()
