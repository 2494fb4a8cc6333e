"""Paginator definitions and their resolution into page/item closures."""

from __future__ import annotations

import json
import logging as py_logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from sdkruntime.errors import ConfigurationError
from sdkruntime.pagination.fields import (
    UnknownMemberError,
    check_writable,
    copy_with_member,
    is_absent_token,
    make_path_reader,
    snake_case,
    split_path,
)

logger = py_logging.getLogger(__name__)

Operation = Callable[[object], object]


class PaginationSpec(BaseModel):
    """Where one operation keeps its continuation tokens and its result collection."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    input_token: str
    output_token: str
    result_key: str
    limit_key: str = ""

    @field_validator("input_token")
    @classmethod
    def _validate_input_token(cls, value: str) -> str:
        name = value.strip()
        if not name or "." in name:
            raise ValueError(f"Invalid input token member: {value!r}")
        return name

    @field_validator("output_token", "result_key")
    @classmethod
    def _validate_path(cls, value: str) -> str:
        return ".".join(split_path(value))

    @property
    def items_alias(self) -> str:
        return snake_case(split_path(self.result_key)[-1])

    def resolve(self, operation: Operation, first_request: object, first_page: object) -> ResolvedPagination:
        """Bind this definition to one paginated call.

        Unresolvable members and a result key that is neither a list nor a map
        are reported here, before any page beyond the first is requested.
        """
        try:
            input_member = check_writable(first_request, self.input_token)
        except UnknownMemberError as exc:
            raise ConfigurationError(
                f"Request {exc.owner_type} has no input token member {self.input_token!r}.",
                hint="Check the paginator definition against the request model.",
            ) from exc

        read_token = make_path_reader(self.output_token)
        read_items = make_path_reader(self.result_key)
        try:
            read_token(first_page)
            collection = read_items(first_page)
        except UnknownMemberError as exc:
            raise ConfigurationError(
                f"Response {exc.owner_type} has no member {exc.member!r}.",
                hint="Check output_token and result_key in the paginator definition.",
            ) from exc
        if collection is not None and _collection_kind(collection) is None:
            raise ConfigurationError(
                f"Result key {self.result_key!r} resolved to {type(collection).__name__}, not a list or map.",
                hint="Point result_key at the paginated collection.",
            )

        def fetch_next_page(page: object) -> object | None:
            if page is None:
                return None
            token = read_token(page)
            if is_absent_token(token):
                return None
            logger.debug("Requesting next page with %s", input_member)
            return operation(copy_with_member(first_request, input_member, token))

        def extract_items(page: object) -> Iterable[object] | None:
            if page is None:
                return None
            collection = read_items(page)
            if collection is None:
                return None
            if _collection_kind(collection) == "map":
                return list(collection.items())  # type: ignore[union-attr]
            return collection  # type: ignore[return-value]

        return ResolvedPagination(
            fetch_next_page=fetch_next_page,
            extract_items=extract_items,
            items_alias=self.items_alias,
        )


@dataclass(frozen=True)
class ResolvedPagination:
    fetch_next_page: Callable[[object], object | None]
    extract_items: Callable[[object], Iterable[object] | None]
    items_alias: str = ""


def _collection_kind(value: object) -> str | None:
    if isinstance(value, Mapping):
        return "map"
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return "list"
    return None


def parse_paginator_definitions(document: object) -> dict[str, PaginationSpec]:
    if not isinstance(document, dict) or not isinstance(document.get("pagination"), dict):
        raise ConfigurationError(
            "Paginator definitions must contain a 'pagination' object.",
            hint='Use {"pagination": {"OperationName": {...}}}.',
        )
    definitions: dict[str, PaginationSpec] = {}
    for operation_name, payload in document["pagination"].items():
        try:
            definitions[operation_name] = PaginationSpec.model_validate(payload)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid paginator definition for {operation_name}.",
                hint=str(exc.errors()[0].get("msg", "")) if exc.errors() else "",
            ) from exc
    return definitions


def load_paginator_definitions(path: str | Path) -> dict[str, PaginationSpec]:
    resolved = Path(path).expanduser()
    try:
        document = json.loads(resolved.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(
            f"Paginator definitions could not be read: {resolved}",
            hint=str(exc),
        ) from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Paginator definitions are not valid JSON: {resolved}",
            hint=f"line {exc.lineno}, column {exc.colno}",
        ) from exc
    return parse_paginator_definitions(document)
