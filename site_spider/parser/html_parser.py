# === FILE: site_spider/parser/html_parser.py ===
"""HTML document helpers for SiteSpider.

The crawler hands us a parsed document (a :class:`bs4.BeautifulSoup` tree)
for every markup page.  This module owns the three read-only walks the
extraction pipeline needs:

* :func:`parse_document` - build the tree from raw markup (used by
  :meth:`site_spider.page.models.PageRecord.build` and the archive reader);
* :func:`iter_html_comments` - comment nodes in document order, stripped,
  empty ones dropped;
* :func:`iter_inline_scripts` - bodies of ``<script>`` tags whose ``type``
  attribute is one of the accepted JavaScript types.

None of the helpers modify the tree.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Union

from bs4 import BeautifulSoup, Comment
from bs4.element import Tag

__all__: Sequence[str] = ("DEFAULT_SCRIPT_TYPES", "parse_document", "iter_html_comments", "iter_inline_scripts")

DEFAULT_SCRIPT_TYPES: tuple[str, ...] = ("text/javascript",)


def parse_document(markup: Union[str, bytes]) -> BeautifulSoup:
    """Parse raw markup with the stdlib-backed ``html.parser`` tree builder."""
    return BeautifulSoup(markup, "html.parser")


def iter_html_comments(document: BeautifulSoup) -> Iterator[str]:
    """Yield the stripped text of every HTML comment, head to body."""
    for node in document.find_all(string=lambda text: isinstance(text, Comment)):
        text = str(node).strip()
        if text:
            yield text


def iter_inline_scripts(
    document: BeautifulSoup,
    script_types: Iterable[str] = DEFAULT_SCRIPT_TYPES,
) -> Iterator[str]:
    """Yield inline script bodies in order of appearance.

    Only ``<script>`` tags whose ``type`` (trimmed, case-insensitive) is in
    *script_types* are considered; untyped and ``module`` scripts are skipped.
    """
    accepted = {t.strip().lower() for t in script_types}
    for tag in document.find_all("script"):
        if not isinstance(tag, Tag):
            continue
        script_type = tag.get("type")
        if not isinstance(script_type, str) or script_type.strip().lower() not in accepted:
            continue
        body = tag.string
        if body:
            yield str(body)
