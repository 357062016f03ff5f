"""Pure predicates over extracted JavaScript string values.

They never re-scan anything and keep no state, so they can be chained as
extra filter stages after :func:`site_spider.javascript.literals.iter_strings`.
"""
from __future__ import annotations

import re
from typing import Callable, Iterable, Iterator

__all__ = [
    "is_relative_path",
    "is_absolute_path",
    "is_path",
    "is_url",
    "select",
]

_SEGMENT = r"[^\s/\\?#]+"
_SUFFIX = r"(?:[?#]\S*)?"

# "name.ext" or "seg/seg[/seg...]"; never starts with '/'
_RELATIVE_PATH_RE = re.compile(
    rf"(?:{_SEGMENT}(?:/{_SEGMENT})+/?|[^\s/\\?#.][^\s/\\?#]*\.[A-Za-z][A-Za-z0-9]*){_SUFFIX}"
)

_ABSOLUTE_PATH_RE = re.compile(rf"(?:/{_SEGMENT})+/?{_SUFFIX}")

_URL_RE = re.compile(r"\b[A-Za-z][A-Za-z0-9+.\-]*://[^\s/?#\"'<>]+")


def is_relative_path(value: str) -> bool:
    """``file.txt``, ``dir/name``, ``../up/name`` – but not ``name`` or ``/name``."""
    return _RELATIVE_PATH_RE.fullmatch(value) is not None


def is_absolute_path(value: str) -> bool:
    """One or more ``/segment`` groups, e.g. ``/api/v1/users``."""
    return _ABSOLUTE_PATH_RE.fullmatch(value) is not None


def is_path(value: str) -> bool:
    return is_relative_path(value) or is_absolute_path(value)


def is_url(value: str) -> bool:
    """True when *value* contains ``scheme://host`` anywhere."""
    return _URL_RE.search(value) is not None


def select(values: Iterable[str], predicate: Callable[[str], bool]) -> Iterator[str]:
    """Pass through the values accepted by *predicate*, unchanged and in order."""
    return (value for value in values if predicate(value))
