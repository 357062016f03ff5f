# site_spider/page/models.py
"""
Data models for pages handed to SiteSpider by the external crawler.
"""
from __future__ import annotations

import ssl
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Optional, Protocol, Union, runtime_checkable
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from site_spider.parser.html_parser import parse_document
from site_spider.utils import extract_host, parse_content_type

__all__ = ("TLSSession", "SSLSessionHandle", "PageRecord")

_HTML_TYPES = ("text/html", "application/xhtml+xml")
_JAVASCRIPT_TYPES = ("application/javascript", "text/javascript", "application/x-javascript")


@runtime_checkable
class TLSSession(Protocol):
    """Anything that can hand out the DER-encoded peer certificate of a connection."""

    def peer_certificate(self) -> Optional[bytes]:
        ...


@dataclass(frozen=True, slots=True)
class SSLSessionHandle:
    """Adapts a live :class:`ssl.SSLSocket` or :class:`ssl.SSLObject` to :class:`TLSSession`."""

    connection: Union[ssl.SSLSocket, ssl.SSLObject]

    def peer_certificate(self) -> Optional[bytes]:
        return self.connection.getpeercert(binary_form=True)


@dataclass(frozen=True)
class PageRecord:
    """A fetched resource: URL, status, content type, raw body, parsed tree and TLS session.

    Records are produced by the crawler and only borrowed by the pipeline.
    """

    url: str
    content_type: str = ""
    body: bytes = b""
    status: int = 200
    document: Optional[BeautifulSoup] = field(default=None, repr=False, compare=False)
    tls_session: Optional[TLSSession] = field(default=None, repr=False, compare=False)

    @classmethod
    def build(
        cls,
        url: str,
        body: Union[str, bytes],
        content_type: str = "text/html",
        *,
        status: int = 200,
        tls_session: Optional[TLSSession] = None,
    ) -> PageRecord:
        """Create a record, parsing the body into a document when it is markup."""
        raw = body.encode("utf-8") if isinstance(body, str) else body
        mime, _ = parse_content_type(content_type)
        document = parse_document(raw) if raw and mime in _HTML_TYPES else None
        return cls(
            url=url,
            content_type=content_type,
            body=raw,
            status=status,
            document=document,
            tls_session=tls_session,
        )

    @property
    def mime_type(self) -> str:
        return parse_content_type(self.content_type)[0]

    @property
    def charset(self) -> Optional[str]:
        return parse_content_type(self.content_type)[1]

    @property
    def text(self) -> str:
        """Body decoded with the declared charset, UTF-8 otherwise; never raises."""
        encoding = self.charset or "utf-8"
        try:
            return self.body.decode(encoding, errors="replace")
        except LookupError:
            return self.body.decode("utf-8", errors="replace")

    @property
    def host(self) -> Optional[str]:
        return extract_host(self.url)

    @property
    def path(self) -> str:
        try:
            return urlsplit(self.url).path or "/"
        except ValueError:
            return "/"

    @property
    def is_html(self) -> bool:
        return self.mime_type in _HTML_TYPES

    def is_javascript(self, content_types: tuple[str, ...] | list[str] = _JAVASCRIPT_TYPES) -> bool:
        return self.mime_type in content_types

    def is_icon(self, content_types: tuple[str, ...] | list[str]) -> bool:
        """An icon is recognized by MIME type or by an ``.ico`` path."""
        return self.mime_type in content_types or PurePosixPath(self.path).suffix.lower() == ".ico"
