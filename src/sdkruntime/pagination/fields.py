"""Member access on request/response models resolved once per paginated operation.

Models are either mappings (decoded JSON) or attribute objects such as
dataclasses and pydantic models. A key missing from a mapping reads as an
absent value; a member missing from an attribute object is a shape error.
"""

from __future__ import annotations

import copy
import dataclasses
import re
from collections.abc import Callable, Mapping

from pydantic import BaseModel

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


class UnknownMemberError(LookupError):
    def __init__(self, owner: object, member: str) -> None:
        self.owner_type = type(owner).__name__
        self.member = member
        super().__init__(f"{self.owner_type} has no member {member!r}")


def snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name.strip()).replace("-", "_").lower()


def split_path(path: str) -> list[str]:
    segments = [segment.strip() for segment in path.split(".")]
    if not segments or any(not segment for segment in segments):
        raise ValueError(f"Invalid member path: {path!r}")
    return segments


def _member_names(owner: object) -> tuple[str, ...]:
    if isinstance(owner, BaseModel):
        return tuple(type(owner).model_fields)
    if dataclasses.is_dataclass(owner) and not isinstance(owner, type):
        return tuple(item.name for item in dataclasses.fields(owner))
    return ()


def _lookup_name(owner: object, member: str) -> str:
    """Accept the wire name (``NextToken``) or the Python name (``next_token``)."""
    if hasattr(owner, member):
        return member
    pythonic = snake_case(member)
    if pythonic != member and hasattr(owner, pythonic):
        return pythonic
    raise UnknownMemberError(owner, member)


def read_member(owner: object, member: str) -> object:
    if isinstance(owner, Mapping):
        if member in owner:
            return owner[member]
        return owner.get(snake_case(member))
    return getattr(owner, _lookup_name(owner, member))


def make_path_reader(path: str) -> Callable[[object], object]:
    segments = split_path(path)

    def read(owner: object) -> object:
        current: object = owner
        for segment in segments:
            if current is None:
                return None
            current = read_member(current, segment)
        return current

    return read


def check_writable(owner: object, member: str) -> str:
    """Return the concrete member name ``copy_with_member`` will set."""
    if isinstance(owner, Mapping):
        return member
    names = _member_names(owner)
    if names:
        if member in names:
            return member
        pythonic = snake_case(member)
        if pythonic in names:
            return pythonic
        raise UnknownMemberError(owner, member)
    return _lookup_name(owner, member)


def copy_with_member(owner: object, member: str, value: object) -> object:
    """Copy of ``owner`` with one member replaced; ``owner`` itself is left untouched."""
    if isinstance(owner, Mapping):
        updated = dict(owner)
        updated[member] = value
        return updated
    if isinstance(owner, BaseModel):
        return owner.model_copy(update={member: value})
    if dataclasses.is_dataclass(owner) and not isinstance(owner, type):
        return dataclasses.replace(owner, **{member: value})
    clone = copy.copy(owner)
    setattr(clone, member, value)
    return clone


def is_absent_token(token: object) -> bool:
    if token is None:
        return True
    if isinstance(token, (str, bytes, Mapping, list, tuple)):
        return len(token) == 0
    return False
