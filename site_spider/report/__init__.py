# File: site_spider/report/__init__.py
"""site_spider.report: Генерация отчётов об извлечении (JSON и HTML), используемая CLI и тестами."""

from site_spider.report.html_report import render_html
from site_spider.report.json_report import render_json

__all__ = ["render_json", "render_html"]
