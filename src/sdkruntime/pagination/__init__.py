"""Lazy multi-page iteration over continuation-token APIs."""

from .definition import (
    PaginationSpec,
    ResolvedPagination,
    load_paginator_definitions,
    parse_paginator_definitions,
)
from .items import ItemCursor, ItemSequence
from .pages import PageCursor, PageSequence
from .paginator import Paginator

__all__ = [
    "ItemCursor",
    "ItemSequence",
    "load_paginator_definitions",
    "PageCursor",
    "PageSequence",
    "PaginationSpec",
    "Paginator",
    "parse_paginator_definitions",
    "ResolvedPagination",
]
