"""
SiteSpider package initializer.
Defines package version and exposes the extraction pipeline.
"""
__version__ = "0.1.0"

from site_spider.config import SpiderConfig, load_config
from site_spider.page.models import PageRecord
from site_spider.pipeline import ExtractionPipeline

__all__ = ["__version__", "SpiderConfig", "load_config", "PageRecord", "ExtractionPipeline"]
