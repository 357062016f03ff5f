"""Lexical scanner approximating JavaScript tokenization.

The scanner does not build a syntax tree.  It walks the source once and cuts
it into contiguous :class:`ScanSpan` regions:

* ``STRING``   – single- or double-quoted literal (quotes included in ``text``);
* ``REGEX``    – inline regular-expression literal, never scanned further;
* ``TEMPLATE`` – backtick template literal, never scanned further;
* ``COMMENT``  – ``// ...`` line comment (newline included) or ``/* ... */``;
* ``OTHER``    – everything else, batched into runs.

A ``/`` is only treated as the start of a regex literal when the previous
non-whitespace character is one of ``{ [ ( ; : , =`` or there is none.  In
every other position it is division (or a comment opener).

Template literals end at the next unescaped backtick, so a template nested
inside a ``${...}`` interpolation terminates the outer one early.  Scanning
then resumes in the middle of the outer template.

Malformed input (unterminated strings, comments, regexes) never raises: the
opening character simply becomes part of an ``OTHER`` run.  Concatenating the
``text`` of all spans reproduces the input exactly.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from site_spider.javascript.escapes import unquote

__all__ = ["SpanKind", "ScanSpan", "scan", "tokenize"]


class SpanKind(str, Enum):
    STRING = "string"
    COMMENT = "comment"
    REGEX = "regex"
    TEMPLATE = "template"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class ScanSpan:
    """A labelled ``[start, end)`` slice of the scanned source."""

    kind: SpanKind
    text: str
    start: int
    end: int

    @property
    def value(self) -> str:
        """Unquoted contents for strings, the exact source text for everything else."""
        if self.kind is SpanKind.STRING:
            return unquote(self.text)
        return self.text


_CANDIDATE_RE = re.compile(r"[\"'`/]")

_STRING_RES = {
    '"': re.compile(r'"(?:[^"\\\n]|\\(?:\r\n|.))*"', re.DOTALL),
    "'": re.compile(r"'(?:[^'\\\n]|\\(?:\r\n|.))*'", re.DOTALL),
}

# body may not start with '*' or '/', classes are consumed whole
_REGEX_LITERAL_RE = re.compile(
    r"/(?![*/])"
    r"(?:\\[^\n]|\[(?:\\[^\n]|[^\]\\\n])*\]|[^/\\\[\n])+"
    r"/[A-Za-z]*"
)

_TEMPLATE_RE = re.compile(r"`(?:[^`\\]|\\.)*`", re.DOTALL)

_LINE_COMMENT_RE = re.compile(r"//[^\n]*\n?")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)

_REGEX_PRECEDERS = frozenset("{[(;:,=")


def _regex_allowed(source: str, pos: int) -> bool:
    index = pos - 1
    while index >= 0 and source[index].isspace():
        index -= 1
    return index < 0 or source[index] in _REGEX_PRECEDERS


def _match_at(source: str, pos: int, last_close: int) -> Tuple[Optional[SpanKind], Optional[re.Match[str]]]:
    char = source[pos]

    if char in _STRING_RES:
        match = _STRING_RES[char].match(source, pos)
        if match:
            return SpanKind.STRING, match

    if char == "/" and _regex_allowed(source, pos):
        match = _REGEX_LITERAL_RE.match(source, pos)
        if match:
            return SpanKind.REGEX, match

    if char == "`":
        match = _TEMPLATE_RE.match(source, pos)
        if match:
            return SpanKind.TEMPLATE, match

    if char == "/":
        match = _LINE_COMMENT_RE.match(source, pos)
        # an opener past the last "*/" can never be closed
        if match is None and last_close >= pos + 2:
            match = _BLOCK_COMMENT_RE.match(source, pos)
        if match:
            return SpanKind.COMMENT, match

    return None, None


def scan(source: str) -> Iterator[ScanSpan]:
    """Lazily yield the spans of *source*, left to right, with no gaps."""
    length = len(source)
    pos = 0
    other_start = 0
    last_close = source.rfind("*/")

    while pos < length:
        candidate = _CANDIDATE_RE.search(source, pos)
        if candidate is None:
            break
        pos = candidate.start()

        kind, match = _match_at(source, pos, last_close)
        if kind is None or match is None:
            pos += 1
            continue

        if other_start < pos:
            yield ScanSpan(SpanKind.OTHER, source[other_start:pos], other_start, pos)
        end = match.end()
        yield ScanSpan(kind, match.group(), pos, end)
        pos = other_start = end

    if other_start < length:
        yield ScanSpan(SpanKind.OTHER, source[other_start:], other_start, length)


def tokenize(source: str) -> List[ScanSpan]:
    """Eager variant of :func:`scan`."""
    return list(scan(source))
