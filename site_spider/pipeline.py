# File: site_spider/pipeline.py
"""site_spider.pipeline: Orchestration layer - feeds the page stream through every registered extractor.

Usage::

    pipeline = ExtractionPipeline(pages, config)
    pipeline.every_host(print)
    pipeline.every_javascript_url_string(lambda url, page: found.append((url, page.url)))
    pipeline.run()

Pages are pulled one at a time; every registered extractor sees a page before
the next one is pulled, so the dedup trackers are updated in page-arrival
order.  Each JavaScript fragment of a page is scanned at most once no matter
how many extractors consume it.
"""
from __future__ import annotations

import time
from functools import cached_property
from typing import Any, Callable, Iterable, List, Optional

from cryptography import x509

from site_spider.config import SpiderConfig
from site_spider.dispatch import as_emitter
from site_spider.javascript.classifiers import (
    is_absolute_path,
    is_path,
    is_relative_path,
    is_url,
    select,
)
from site_spider.javascript.literals import comments_from_spans, strings_from_spans
from site_spider.javascript.scanner import ScanSpan, tokenize
from site_spider.logger import get_logger
from site_spider.page.models import PageRecord
from site_spider.parser.html_parser import iter_html_comments, iter_inline_scripts
from site_spider.trackers import CertTracker, FaviconFilter, HostTracker

__all__ = ["ExtractionPipeline"]

logger = get_logger(__name__)

_Handler = Callable[["_PageContext"], None]


class _PageContext:
    """Everything derived from one page, computed on first use and shared by all extractors."""

    def __init__(self, page: PageRecord, config: SpiderConfig) -> None:
        self.page = page
        self.config = config
        self.new_host: Optional[str] = None
        self.new_cert: Optional[x509.Certificate] = None

    @cached_property
    def scripts(self) -> List[str]:
        """JS fragments attributed to the page: its own body, or its inline scripts."""
        if self.page.is_javascript(self.config.javascript_content_types):
            return [self.page.text]
        if self.page.document is not None:
            return list(iter_inline_scripts(self.page.document, self.config.script_types))
        return []

    @cached_property
    def spans(self) -> List[List[ScanSpan]]:
        return [tokenize(script) for script in self.scripts]

    @cached_property
    def strings(self) -> List[str]:
        return [value for spans in self.spans for value in strings_from_spans(spans)]

    @cached_property
    def javascript_comments(self) -> List[str]:
        return [text for spans in self.spans for text in comments_from_spans(spans)]

    @cached_property
    def html_comments(self) -> List[str]:
        if self.page.document is None:
            return []
        return list(iter_html_comments(self.page.document))


class ExtractionPipeline:
    """Runs registered extractors over a stream of :class:`PageRecord`.

    The pipeline does not crawl: it holds whatever iterable of pages the
    crawler (or :func:`site_spider.page.source.iter_archive_pages`) provides.
    """

    def __init__(self, pages: Iterable[PageRecord], config: Optional[SpiderConfig] = None) -> None:
        self.config = config or SpiderConfig()
        self._pages = pages
        self._handlers: List[_Handler] = []
        self._hosts = HostTracker()
        self._certs = CertTracker()
        self._favicons = FaviconFilter(self.config.icon_content_types)
        self._stopped = False

    # ------------------------------------------------------------------ #
    # Tracker state                                                      #
    # ------------------------------------------------------------------ #

    @property
    def visited_hosts(self) -> List[str]:
        """Hostnames seen so far, in discovery order."""
        return self._hosts.seen

    @property
    def collected_certs(self) -> List[int]:
        """Serial numbers of the certificates seen so far, in discovery order."""
        return self._certs.serials

    # ------------------------------------------------------------------ #
    # Registration                                                       #
    # ------------------------------------------------------------------ #

    def _register(self, handler: _Handler) -> ExtractionPipeline:
        self._handlers.append(handler)
        return self

    def _register_values(
        self,
        values: Callable[[_PageContext], Iterable[Any]],
        callback: Callable[..., Any],
        include_origin: Optional[bool],
    ) -> ExtractionPipeline:
        emit = as_emitter(callback, include_origin)

        def handler(ctx: _PageContext) -> None:
            for value in values(ctx):
                emit(value, ctx.page)

        return self._register(handler)

    def _register_strings(
        self,
        predicate: Callable[[str], bool],
        callback: Callable[..., Any],
        include_origin: Optional[bool],
    ) -> ExtractionPipeline:
        return self._register_values(
            lambda ctx: select(ctx.strings, predicate), callback, include_origin
        )

    def every_page(
        self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None
    ) -> ExtractionPipeline:
        """Pass every page to *callback*."""
        return self._register_values(lambda ctx: [ctx.page], callback, include_origin)

    def every_host(self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None) -> ExtractionPipeline:
        """Pass every hostname once, on the first page served from it."""
        return self._register_values(
            lambda ctx: [] if ctx.new_host is None else [ctx.new_host], callback, include_origin
        )

    def every_cert(self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None) -> ExtractionPipeline:
        """Pass every distinct peer certificate (``cryptography.x509.Certificate``) once."""
        return self._register_values(
            lambda ctx: [] if ctx.new_cert is None else [ctx.new_cert], callback, include_origin
        )

    def every_favicon(
        self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None
    ) -> ExtractionPipeline:
        """Pass every page that is an icon resource."""

        def favicons(ctx: _PageContext) -> List[PageRecord]:
            page = self._favicons.observe(ctx.page)
            return [] if page is None else [page]

        return self._register_values(favicons, callback, include_origin)

    def every_html_comment(
        self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None
    ) -> ExtractionPipeline:
        """Pass the stripped text of every non-empty HTML comment."""
        return self._register_values(lambda ctx: ctx.html_comments, callback, include_origin)

    def every_javascript(
        self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None
    ) -> ExtractionPipeline:
        """Pass every JS source fragment: inline ``<script>`` bodies and fetched ``.js`` bodies."""
        return self._register_values(lambda ctx: ctx.scripts, callback, include_origin)

    def every_javascript_string(
        self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None
    ) -> ExtractionPipeline:
        """Pass the unquoted value of every JS string literal."""
        return self._register_values(lambda ctx: ctx.strings, callback, include_origin)

    def every_javascript_path_string(
        self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None
    ) -> ExtractionPipeline:
        return self._register_strings(is_path, callback, include_origin)

    def every_javascript_absolute_path_string(
        self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None
    ) -> ExtractionPipeline:
        return self._register_strings(is_absolute_path, callback, include_origin)

    def every_javascript_relative_path_string(
        self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None
    ) -> ExtractionPipeline:
        return self._register_strings(is_relative_path, callback, include_origin)

    def every_javascript_url_string(
        self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None
    ) -> ExtractionPipeline:
        return self._register_strings(is_url, callback, include_origin)

    def every_javascript_comment(
        self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None
    ) -> ExtractionPipeline:
        """Pass every JS comment with its ``//`` / ``/* */`` delimiters."""
        return self._register_values(lambda ctx: ctx.javascript_comments, callback, include_origin)

    def every_comment(
        self, callback: Callable[..., Any], *, include_origin: Optional[bool] = None
    ) -> ExtractionPipeline:
        """Pass HTML comments, then JS comments, page by page."""
        return self._register_values(
            lambda ctx: ctx.html_comments + ctx.javascript_comments, callback, include_origin
        )

    # ------------------------------------------------------------------ #
    # Running                                                            #
    # ------------------------------------------------------------------ #

    def stop(self) -> None:
        """Stop pulling pages once the current one is fully processed."""
        self._stopped = True

    def process(self, page: PageRecord) -> None:
        """Run every registered extractor over a single page."""
        ctx = _PageContext(page, self.config)
        ctx.new_host = self._hosts.observe(page)
        ctx.new_cert = self._certs.observe(page)
        for handler in self._handlers:
            handler(ctx)

    def run(self) -> int:
        """Consume the page stream; returns the number of processed pages."""
        self._stopped = False
        limit = self.config.max_pages
        logger.info("Starting extraction with %d extractor(s)…", len(self._handlers))
        start = time.monotonic()
        count = 0

        for page in self._pages:
            logger.debug("Processing %s (%s)", page.url, page.content_type or "no content-type")
            self.process(page)
            count += 1
            if self._stopped or (limit is not None and count >= limit):
                break

        duration = time.monotonic() - start
        logger.info(
            "Finished: %d pages in %.2f s, %d hosts, %d certificates",
            count,
            duration,
            len(self._hosts),
            len(self._certs),
        )
        return count
