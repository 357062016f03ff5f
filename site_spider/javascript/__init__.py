"""site_spider.javascript: Lexical scanning of JavaScript sources and classification of extracted strings."""

from site_spider.javascript.classifiers import is_absolute_path, is_path, is_relative_path, is_url
from site_spider.javascript.escapes import unquote
from site_spider.javascript.literals import iter_comments, iter_strings
from site_spider.javascript.scanner import ScanSpan, SpanKind, scan, tokenize

__all__ = [
    "ScanSpan",
    "SpanKind",
    "scan",
    "tokenize",
    "unquote",
    "iter_strings",
    "iter_comments",
    "is_relative_path",
    "is_absolute_path",
    "is_path",
    "is_url",
]
