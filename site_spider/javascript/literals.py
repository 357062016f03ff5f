"""String-literal and comment extraction on top of :mod:`site_spider.javascript.scanner`."""
from __future__ import annotations

from typing import Iterable, Iterator

from site_spider.javascript.scanner import ScanSpan, SpanKind, scan

__all__ = ["iter_strings", "iter_comments", "strings_from_spans", "comments_from_spans"]


def strings_from_spans(spans: Iterable[ScanSpan]) -> Iterator[str]:
    for span in spans:
        if span.kind is SpanKind.STRING:
            yield span.value


def comments_from_spans(spans: Iterable[ScanSpan]) -> Iterator[str]:
    for span in spans:
        if span.kind is SpanKind.COMMENT:
            yield span.text


def iter_strings(source: str) -> Iterator[str]:
    """Yield the unquoted value of every quoted string literal in *source*.

    Strings inside regex and template literals are not reported.
    """
    return strings_from_spans(scan(source))


def iter_comments(source: str) -> Iterator[str]:
    """Yield every ``//`` and ``/* */`` comment with its delimiters intact."""
    return comments_from_spans(scan(source))
