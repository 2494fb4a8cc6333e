"""Per-operation pagination facade: first page, pages, and flattened items."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

from sdkruntime.errors import ConfigurationError
from sdkruntime.pagination.definition import PaginationSpec
from sdkruntime.pagination.items import ItemSequence
from sdkruntime.pagination.pages import PageSequence
from sdkruntime.retry.executor import with_retry
from sdkruntime.retry.policy import RetryPolicy

PageT = TypeVar("PageT")
ItemT = TypeVar("ItemT")


class Paginator(Generic[PageT, ItemT]):
    """Pages and items of one logical paginated call.

    Besides ``all_items()``, the items are reachable under the snake_case name
    of the paginated field, e.g. ``paginator.table_names()``. A field name that
    matches an existing attribute (``pages``, ``first_page``, ...) is rejected.
    """

    def __init__(
        self,
        first_page: PageT,
        fetch_next_page: Callable[[PageT], PageT | None],
        extract_items: Callable[[PageT], Iterable[ItemT] | None],
        *,
        items_alias: str = "",
    ) -> None:
        self._check_alias(items_alias)
        self._first_page = first_page
        self._fetch_next_page = fetch_next_page
        self._extract_items = extract_items
        self._items_alias = items_alias

    @classmethod
    def _check_alias(cls, alias: str) -> None:
        if alias and (alias.startswith("_") or hasattr(cls, alias)):
            raise ConfigurationError(
                f"Items alias {alias!r} collides with a Paginator attribute.",
                hint="Use all_items() for this operation or rename the result key.",
            )

    @classmethod
    def from_spec(
        cls,
        spec: PaginationSpec,
        *,
        operation: Callable[[Any], Any],
        first_request: object,
        first_page: object | None = None,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> Paginator[Any, Any]:
        """Resolve ``spec`` for ``operation``.

        When ``policy`` is given, every physical page fetch (including the
        first one, if it still has to be made) goes through the retry loop.
        """
        cls._check_alias(spec.items_alias)
        call = operation
        if policy is not None:
            if sleep is None:
                call = with_retry(operation, policy=policy)
            else:
                call = with_retry(operation, policy=policy, sleep=sleep)
        page = call(first_request) if first_page is None else first_page
        resolved = spec.resolve(call, first_request, page)
        return cls(
            page,
            resolved.fetch_next_page,
            resolved.extract_items,
            items_alias=resolved.items_alias,
        )

    def first_page(self) -> PageT:
        return self._first_page

    def pages(self) -> PageSequence[PageT]:
        return PageSequence(self._first_page, self._fetch_next_page)

    def all_items(self) -> ItemSequence[PageT, ItemT]:
        return ItemSequence(self.pages(), self._extract_items)

    def __iter__(self) -> Iterator[PageT]:
        return iter(self.pages())

    def __getattr__(self, name: str) -> Callable[[], ItemSequence[PageT, ItemT]]:
        alias = self.__dict__.get("_items_alias")
        if alias and name == alias:
            return self.all_items
        raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}")
