"""site_spider.parser: HTML document helpers."""
