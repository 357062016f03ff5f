# File: site_spider/trackers.py
"""site_spider.trackers: Постраничные фильтры с состоянием дедупликации.

* :class:`HostTracker` - выдаёт каждое имя хоста один раз, в порядке обнаружения;
* :class:`CertTracker` - выдаёт каждый TLS-сертификат (по серийному номеру) один раз;
* :class:`FaviconFilter` - пропускает только страницы-иконки, состояния не хранит.

Трекеры не бросают исключений: страницы без хоста, TLS-сессии или
декодируемого сертификата просто пропускаются.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from cryptography import x509

from site_spider.logger import get_logger
from site_spider.page.models import PageRecord

__all__ = ["HostTracker", "CertTracker", "FaviconFilter"]

logger = get_logger(__name__)


class _OrderedKeys:
    """Множество ключей, сохраняющее порядок первого добавления."""

    def __init__(self) -> None:
        self._keys: dict = {}

    def add(self, key) -> bool:
        """Добавляет ключ; возвращает True, если ключ новый."""
        if key in self._keys:
            return False
        self._keys[key] = None
        return True

    def __contains__(self, key) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self):
        return iter(self._keys)


class HostTracker:
    """Отслеживает уже встреченные имена хостов (HostSet)."""

    def __init__(self) -> None:
        self._seen = _OrderedKeys()

    def observe(self, page: PageRecord) -> Optional[str]:
        """Возвращает имя хоста страницы, если оно встречено впервые, иначе None."""
        host = page.host
        if host is None or not self._seen.add(host):
            return None
        logger.debug("New host discovered: %s", host)
        return host

    @property
    def seen(self) -> List[str]:
        return list(self._seen)

    def __len__(self) -> int:
        return len(self._seen)


class CertTracker:
    """Отслеживает серийные номера уже выданных сертификатов (CertLedger)."""

    def __init__(self) -> None:
        self._serials = _OrderedKeys()

    def observe(self, page: PageRecord) -> Optional[x509.Certificate]:
        """Возвращает сертификат сервера, если его серийный номер ещё не встречался."""
        if page.tls_session is None:
            return None
        der = page.tls_session.peer_certificate()
        if not der:
            return None
        try:
            cert = x509.load_der_x509_certificate(der)
        except ValueError as exc:
            logger.warning("Cannot decode peer certificate of %s: %s", page.url, exc)
            return None
        if not self._serials.add(cert.serial_number):
            return None
        logger.debug("New certificate discovered: serial=%x (%s)", cert.serial_number, page.url)
        return cert

    @property
    def serials(self) -> List[int]:
        return list(self._serials)

    def __len__(self) -> int:
        return len(self._serials)


class FaviconFilter:
    """Пропускает страницы, распознанные как иконки (по MIME-типу или пути ``*.ico``)."""

    def __init__(self, content_types: Iterable[str] = ("image/x-icon", "image/vnd.microsoft.icon")) -> None:
        self.content_types = tuple(t.lower() for t in content_types)

    def observe(self, page: PageRecord) -> Optional[PageRecord]:
        return page if page.is_icon(self.content_types) else None
