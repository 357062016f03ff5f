"""site_spider.page: PageRecord model and offline page streams."""

from site_spider.page.models import PageRecord, SSLSessionHandle, TLSSession
from site_spider.page.source import iter_archive_pages

__all__ = ["PageRecord", "TLSSession", "SSLSessionHandle", "iter_archive_pages"]
