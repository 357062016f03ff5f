# File: tests/test_literals.py
"""Tests for JS string unquoting and literal/comment extraction."""
from __future__ import annotations

import pytest

from site_spider.javascript.escapes import unquote
from site_spider.javascript.literals import iter_comments, iter_strings


@pytest.mark.parametrize(
    "literal,expected",
    [
        (r'"plain"', "plain"),
        (r"'single'", "single"),
        (r'"a\nb\tc"', "a\nb\tc"),
        (r'"back\\slash"', "back\\slash"),
        (r"'it\'s'", "it's"),
        (r'"say \"hi\""', 'say "hi"'),
        (r'"\x41B\u{43}"', "ABC"),
        (r'"\uD83D\uDE00"', "\U0001F600"),
        (r'"\u{1F600}"', "\U0001F600"),
        (r'"\101\0"', "A\x00"),
        (r'"\q\8"', "q8"),
        ('"line \\\ncontinued"', "line continued"),
        (r'"\b\f\v\r"', "\b\f\v\r"),
        (r'"\uD800"', "\ufffd"),
        (r'""', ""),
    ],
)
def test_unquote(literal, expected):
    assert unquote(literal) == expected


def test_iter_strings_in_source_order():
    source = "var a = \"x\", b = 'y';\nfoo(\"z\\n\");"
    assert list(iter_strings(source)) == ["x", "y", "z\n"]


def test_iter_strings_skips_comments():
    source = "// 'not a string'\n/* \"neither\" */ var s = 'yes';"
    assert list(iter_strings(source)) == ["yes"]


def test_iter_comments():
    source = "a(); // one\nb(); /* two\nlines */ c('// not a comment');"
    assert list(iter_comments(source)) == ["// one\n", "/* two\nlines */"]


def test_iter_strings_never_raises_on_garbage():
    assert list(iter_strings("\"'`/\\/*")) == []


@pytest.mark.parametrize(
    "source,expected",
    [
        ('var s = "a\\\r\nb";', ["ab"]),
        ("var s = 'a\\\r\nb', t = 'c';", ["ab", "c"]),
        ('var s = "a\\\nb";', ["ab"]),
    ],
)
def test_line_continuations_keep_the_literal(source, expected):
    assert list(iter_strings(source)) == expected
