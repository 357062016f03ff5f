# site_spider/page/source.py
"""
Offline page stream: replays an archive directory as PageRecords.

This is the inverse of :meth:`site_spider.archive.Archive.write`; a file
``foo/index.html`` becomes the URL ``<base_url>/foo/``.
"""
from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Iterator, Union

from site_spider.logger import get_logger
from site_spider.page.models import PageRecord

__all__ = ("iter_archive_pages",)

logger = get_logger(__name__)

_FALLBACK_TYPE = "application/octet-stream"


def _guess_content_type(name: str) -> str:
    guessed, _ = mimetypes.guess_type(name.split("?", 1)[0])
    return guessed or _FALLBACK_TYPE


def _url_for(relative: str, base_url: str) -> str:
    if relative == "index.html" or relative.endswith("/index.html"):
        relative = relative[: -len("index.html")]
    return f"{base_url.rstrip('/')}/{relative}"


def iter_archive_pages(root: Union[str, Path], base_url: str) -> Iterator[PageRecord]:
    """Yield a PageRecord for every archived file under *root*, sorted by path.

    ``.git`` metadata is skipped. Markup files get a parsed document.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise FileNotFoundError(f"Archive directory not found: {root_path}")

    for path in sorted(p for p in root_path.rglob("*") if p.is_file()):
        relative = path.relative_to(root_path).as_posix()
        if relative.split("/", 1)[0] == ".git":
            continue
        url = _url_for(relative, base_url)
        content_type = _guess_content_type(path.name)
        logger.debug("Replaying %s as %s (%s)", path, url, content_type)
        yield PageRecord.build(url, path.read_bytes(), content_type)
