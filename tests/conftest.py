# File: tests/conftest.py
import datetime
from dataclasses import dataclass
from typing import Callable, Optional

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from site_spider.page.models import PageRecord


@dataclass
class FakeTLSSession:
    """TLS session stub returning a fixed DER certificate."""

    der: Optional[bytes]

    def peer_certificate(self) -> Optional[bytes]:
        return self.der


@pytest.fixture(scope="session")
def signing_key():
    """One EC key for every generated certificate (key generation is the slow part)."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def make_cert(signing_key) -> Callable[..., bytes]:
    """
    Build a self-signed DER certificate with the given serial number.
    """

    def _make(serial: int, common_name: str = "example.com") -> bytes:
        name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
        now = datetime.datetime.now(datetime.timezone.utc)
        cert = (
            x509.CertificateBuilder()
            .subject_name(name)
            .issuer_name(name)
            .public_key(signing_key.public_key())
            .serial_number(serial)
            .not_valid_before(now - datetime.timedelta(days=1))
            .not_valid_after(now + datetime.timedelta(days=30))
            .sign(signing_key, hashes.SHA256())
        )
        return cert.public_bytes(serialization.Encoding.DER)

    return _make


@pytest.fixture()
def make_page() -> Callable[..., PageRecord]:
    """
    Factory for PageRecord instances; markup bodies get a parsed document.
    """

    def _make(
        url: str,
        body: str | bytes = "",
        content_type: str = "text/html",
        *,
        cert: Optional[bytes] = None,
    ) -> PageRecord:
        session = FakeTLSSession(cert) if cert is not None else None
        return PageRecord.build(url, body, content_type, tls_session=session)

    return _make


@pytest.fixture()
def html_page(make_page) -> PageRecord:
    """
    A page with HTML comments, typed, untyped and module inline scripts.
    """
    html = """<html>
<head>
  <!-- head comment -->
  <script type="text/javascript">var api = "/api/v1/users"; // fetch users
</script>
  <script>var ignored = "untyped.js";</script>
  <script type="module">import x from "./module.js";</script>
</head>
<body>
  <!--   -->
  <!-- body comment -->
  <script type="TEXT/JavaScript ">var cdn = "https://cdn.example.com/lib.js", rel = "img/logo.png";</script>
</body>
</html>"""
    return make_page("https://example.com/index.html", html)
