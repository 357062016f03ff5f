# File: site_spider/utils.py
"""site_spider.utils: Утилитарные функции для разбора URL, MIME-типов и путей запроса."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple
from urllib.parse import urlsplit

__all__: Sequence[str] = (
    "extract_host",
    "request_uri",
    "parse_content_type",
)


def extract_host(url: str) -> Optional[str]:
    """Возвращает имя хоста из URL (без порта и учётных данных) или None.

    Для некорректных URL (например, с незакрытой IPv6-скобкой) тоже None.
    """
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def request_uri(url: str) -> str:
    """Возвращает путь URL вместе со строкой запроса, как в HTTP-запросе."""
    parts = urlsplit(url)
    path = parts.path or "/"
    return f"{path}?{parts.query}" if parts.query else path


def parse_content_type(value: Optional[str]) -> Tuple[str, Optional[str]]:
    """Разбирает заголовок Content-Type на MIME-тип (в нижнем регистре) и charset."""
    if not value:
        return "", None
    mime, _, params = value.partition(";")
    charset: Optional[str] = None
    for param in params.split(";"):
        key, _, val = param.partition("=")
        if key.strip().lower() == "charset" and val.strip():
            charset = val.strip().strip('"\'')
    return mime.strip().lower(), charset
