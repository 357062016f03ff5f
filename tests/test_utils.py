# File: tests/test_utils.py
import pytest

from site_spider.utils import extract_host, parse_content_type, request_uri


@pytest.mark.parametrize(
    "url,host",
    [
        ("https://Example.COM/path", "example.com"),
        ("http://user:pw@example.com:8080/", "example.com"),
        ("/relative/only", None),
        ("http://[::1/x", None),
    ],
)
def test_extract_host(url, host):
    assert extract_host(url) == host


@pytest.mark.parametrize(
    "url,uri",
    [
        ("https://example.com", "/"),
        ("https://example.com/a/b", "/a/b"),
        ("https://example.com/search?q=1&x=2#frag", "/search?q=1&x=2"),
    ],
)
def test_request_uri(url, uri):
    assert request_uri(url) == uri


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, ("", None)),
        ("", ("", None)),
        ("Text/HTML", ("text/html", None)),
        ('text/html; charset="UTF-8"', ("text/html", "UTF-8")),
        ("application/javascript;foo=bar; Charset=latin-1", ("application/javascript", "latin-1")),
    ],
)
def test_parse_content_type(value, expected):
    assert parse_content_type(value) == expected
