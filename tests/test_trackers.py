# File: tests/test_trackers.py
from site_spider.trackers import CertTracker, FaviconFilter, HostTracker


def test_host_tracker_first_seen_wins(make_page):
    tracker = HostTracker()
    urls = [
        "https://example.com/",
        "https://example.com/about",
        "https://cdn.example.com/app.js",
        "http://example.com:8080/other",
        "https://other.org/",
    ]
    emitted = [tracker.observe(make_page(url)) for url in urls]
    assert emitted == ["example.com", None, "cdn.example.com", None, "other.org"]
    assert tracker.seen == ["example.com", "cdn.example.com", "other.org"]
    assert len(tracker) == 3


def test_cert_tracker_dedups_by_serial(make_page, make_cert):
    tracker = CertTracker()
    first = make_cert(1001, "a.example.com")
    again = make_cert(1001, "a.example.com")
    second = make_cert(2002, "b.example.com")

    cert = tracker.observe(make_page("https://a.example.com/", cert=first))
    assert cert is not None
    assert cert.serial_number == 1001
    assert tracker.observe(make_page("https://a.example.com/x", cert=again)) is None
    assert tracker.observe(make_page("https://b.example.com/", cert=second)).serial_number == 2002
    assert tracker.serials == [1001, 2002]


def test_cert_tracker_skips_pages_without_tls(make_page):
    tracker = CertTracker()
    assert tracker.observe(make_page("http://example.com/")) is None
    assert tracker.observe(make_page("https://example.com/", cert=b"")) is None
    assert len(tracker) == 0


def test_cert_tracker_skips_garbage_certificates(make_page):
    tracker = CertTracker()
    assert tracker.observe(make_page("https://example.com/", cert=b"not a certificate")) is None
    assert tracker.serials == []


def test_favicon_filter(make_page):
    favicons = FaviconFilter()
    icon = make_page("https://example.com/favicon.ico", b"\x00\x00\x01\x00", "image/x-icon")
    by_path = make_page("https://example.com/static/site.ICO", b"\x00", "application/octet-stream")
    by_type = make_page("https://example.com/icon", b"\x00", "image/vnd.microsoft.icon")
    html = make_page("https://example.com/", "<html></html>")

    assert favicons.observe(icon) is icon
    assert favicons.observe(by_path) is by_path
    assert favicons.observe(by_type) is by_type
    assert favicons.observe(html) is None


def test_malformed_urls_are_skipped(make_page):
    hosts = HostTracker()
    favicons = FaviconFilter()
    broken = make_page("http://[::1/x", "")

    assert hosts.observe(broken) is None
    assert favicons.observe(broken) is None
    assert hosts.observe(make_page("http://[::1]/ok")) == "::1"
    assert hosts.seen == ["::1"]
