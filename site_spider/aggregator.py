# File: site_spider/aggregator.py
"""site_spider.aggregator: Сбор результатов извлечения в единый отчёт."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import List, TypedDict

from cryptography import x509

from site_spider.page.models import PageRecord
from site_spider.pipeline import ExtractionPipeline


class CertInfo(TypedDict):
    """Сведения о TLS-сертификате сервера."""

    serial: str
    subject: str
    issuer: str
    not_after: str
    url: str


class FaviconInfo(TypedDict):
    """Найденная иконка сайта."""

    url: str
    content_type: str
    size: int


class FoundValue(TypedDict):
    """Извлечённое значение (строка или комментарий) и страница-источник."""

    value: str
    url: str


@dataclass(slots=True)
class ExtractionReport:
    """Результаты извлечения: хосты, сертификаты, иконки, комментарии и строки JavaScript."""

    pages_processed: int = 0
    hosts: List[str] = field(default_factory=list)
    certs: List[CertInfo] = field(default_factory=list)
    favicons: List[FaviconInfo] = field(default_factory=list)
    html_comments: List[FoundValue] = field(default_factory=list)
    javascript_comments: List[FoundValue] = field(default_factory=list)
    strings: List[FoundValue] = field(default_factory=list)
    relative_paths: List[FoundValue] = field(default_factory=list)
    absolute_paths: List[FoundValue] = field(default_factory=list)
    urls: List[FoundValue] = field(default_factory=list)

    def as_dict(self) -> dict:
        return asdict(self)

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def _cert_info(cert: x509.Certificate, page: PageRecord) -> CertInfo:
    return {
        "serial": format(cert.serial_number, "x"),
        "subject": cert.subject.rfc4514_string(),
        "issuer": cert.issuer.rfc4514_string(),
        "not_after": cert.not_valid_after_utc.isoformat(),
        "url": page.url,
    }


def _favicon_info(page: PageRecord) -> FaviconInfo:
    return {"url": page.url, "content_type": page.mime_type, "size": len(page.body)}


def _collector(target: List[FoundValue]):
    def collect(value: str, page: PageRecord) -> None:
        target.append({"value": value, "url": page.url})

    return collect


def collect_results(pipeline: ExtractionPipeline) -> ExtractionReport:
    """Подписывает отчёт на все виды извлечения, запускает конвейер и возвращает отчёт."""
    report = ExtractionReport()

    pipeline.every_host(report.hosts.append)
    pipeline.every_cert(lambda cert, page: report.certs.append(_cert_info(cert, page)))
    pipeline.every_favicon(lambda page: report.favicons.append(_favicon_info(page)))
    pipeline.every_html_comment(_collector(report.html_comments))
    pipeline.every_javascript_comment(_collector(report.javascript_comments))
    pipeline.every_javascript_string(_collector(report.strings))
    pipeline.every_javascript_relative_path_string(_collector(report.relative_paths))
    pipeline.every_javascript_absolute_path_string(_collector(report.absolute_paths))
    pipeline.every_javascript_url_string(_collector(report.urls))

    report.pages_processed = pipeline.run()
    return report


__all__ = ["CertInfo", "FaviconInfo", "FoundValue", "ExtractionReport", "collect_results"]
