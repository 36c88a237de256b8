from html import escape
from pathlib import Path
from typing import Dict, List, Optional

import platformdirs
import pytest
import requests

from apkfetch.exceptions import NetworkError

_NETWORK_BLOCK_MSG = (
    "Network access is blocked during tests. Mock requests.* or Session.request."
)

BASE_URL = "https://www.apkmirror.com"


def _block_network(*_args, **_kwargs):
    """
    Prevent network calls in tests by raising a RuntimeError.

    Raises:
        RuntimeError: with `_NETWORK_BLOCK_MSG` indicating that network access is blocked during tests.
    """
    raise RuntimeError(_NETWORK_BLOCK_MSG)


def pytest_configure(config):
    """Register the markers used across the suite."""
    for marker in (
        "unit: fast isolated tests",
        "integration: tests spanning several components",
        "core_downloads: catalog resolution and download tests",
    ):
        config.addinivalue_line("markers", marker)


@pytest.fixture(autouse=True)
def _isolate_test_environment(tmp_path_factory, monkeypatch):
    """
    Point platformdirs and the apkfetch config file at a temporary directory and clear
    GitHub Actions variables so tests never read the developer's environment.
    """
    base = tmp_path_factory.mktemp("apkfetch")
    config_dir = base / "config"
    log_dir = base / "log"
    for path in (config_dir, log_dir):
        path.mkdir(parents=True, exist_ok=True)

    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_dir))
    monkeypatch.setattr(
        platformdirs, "user_config_dir", lambda *_args, **_kwargs: str(config_dir)
    )
    monkeypatch.setattr(
        platformdirs, "user_log_dir", lambda *_args, **_kwargs: str(log_dir)
    )

    import apkfetch.config as config_module

    monkeypatch.setattr(config_module, "CONFIG_DIR", str(config_dir))
    monkeypatch.setattr(
        config_module, "CONFIG_FILE", str(Path(config_dir) / "apkfetch.yaml")
    )

    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    monkeypatch.delenv("APKFETCH_LOG_LEVEL", raising=False)
    for name in (
        "ORG",
        "REPO",
        "VERSION",
        "VERSIONPATTERN",
        "INCLUDEPRERELEASE",
        "BUNDLE",
        "ARCH",
        "DPI",
        "FILENAME",
        "OVERWRITE",
    ):
        monkeypatch.delenv(f"INPUT_{name}", raising=False)


def pytest_runtest_setup():
    """
    Prevent real network requests during tests by replacing HTTP entry points with blocking callables.
    """
    requests.get = _block_network
    requests.post = _block_network
    requests.put = _block_network
    requests.delete = _block_network
    requests.head = _block_network
    requests.patch = _block_network
    requests.options = _block_network
    requests.Session.request = _block_network


# =============================================================================
# Fake transport
# =============================================================================


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(
        self,
        url: str,
        text: str = "",
        chunks: Optional[List[bytes]] = None,
        has_body: bool = True,
        status_code: int = 200,
    ):
        self.url = url
        self.text = text
        self.status_code = status_code
        self.headers: Dict[str, str] = {}
        self.raw = object() if has_body else None
        self._chunks = chunks if chunks is not None else [text.encode("utf-8")]
        self.closed = False

    def iter_content(self, chunk_size=1):
        yield from self._chunks

    def close(self):
        self.closed = True


class FakeFetcher:
    """
    DocumentFetcher double serving canned responses by URL.

    Unknown URLs raise NetworkError with a 404 status, like HttpDocumentFetcher would.
    """

    def __init__(self, pages: Optional[Dict[str, object]] = None):
        self.pages: Dict[str, object] = dict(pages or {})
        self.calls: List[str] = []
        self.closed = False

    def add(self, url: str, response) -> None:
        self.pages[url] = response

    def fetch(self, url: str, stream: bool = False):
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            raise NetworkError(f"HTTP error fetching {url}", url=url, status_code=404)
        if isinstance(page, str):
            return FakeResponse(url, text=page)
        return page

    def close(self):
        self.closed = True


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


# =============================================================================
# Catalog page builders
# =============================================================================


def build_listing_page(entries) -> str:
    """App page whose release list holds `entries` as (label, href) pairs."""
    rows = "".join(
        '<div class="appRow"><div>'
        '<div class="icon"><img src="/icon.png"></div>'
        f'<div><div><h5 class="appRowTitle"><a href="{escape(href)}">{escape(label)}</a></h5></div></div>'
        "</div></div>"
        for label, href in entries
    )
    return (
        "<html><body>"
        '<div id="primary">'
        '<div class="listWidget p-relative"><div>'
        f"{rows}"
        "</div></div>"
        "</div>"
        "</body></html>"
    )


def build_variant_row(
    variant="Universal",
    arch="arm64-v8a",
    version="Android 8.0+",
    dpi="nodpi",
    url="/apk/org/app/app-1-0-release/app-1-0-android-apk-download/",
    badge="APK",
    signature=None,
    signature_tooltip=None,
    date=None,
    date_text=None,
) -> str:
    badge_html = f'<span class="apkm-badge">{escape(badge)}</span>' if badge else ""
    link_html = f'<a href="{escape(url)}">download</a>' if url else ""
    signature_html = ""
    if signature is not None or signature_tooltip is not None:
        title = f' title="{escape(signature_tooltip)}"' if signature_tooltip else ""
        signature_html = f'<span class="signature"{title}>{escape(signature or "")}</span>'
    date_html = ""
    if date is not None or date_text is not None:
        attr = f' data-utcdate="{escape(date)}"' if date else ""
        date_html = f'<span class="datetime_utc"{attr}>{escape(date_text or "")}</span>'
    return (
        '<div class="table-row">'
        f"{badge_html}"
        f'<div class="table-cell">{escape(variant)}</div>'
        f'<div class="table-cell">{escape(arch)}</div>'
        f'<div class="table-cell">{escape(version)}</div>'
        f'<div class="table-cell">{escape(dpi)}</div>'
        f'<div class="table-cell">{link_html}{signature_html}{date_html}</div>'
        "</div>"
    )


def build_variants_page(*rows: str) -> str:
    header = (
        '<div class="table-row headerFont">'
        '<div class="table-cell">Variant</div>'
        '<div class="table-cell">Architecture</div>'
        '<div class="table-cell">Minimum Version</div>'
        '<div class="table-cell">Screen DPI</div>'
        '<div class="table-cell"></div>'
        "</div>"
    )
    return (
        "<html><body>"
        f'<div class="variants-table">{header}{"".join(rows)}</div>'
        "</body></html>"
    )


def build_download_page(href: Optional[str]) -> str:
    button = (
        f'<a class="accent_bg btn btn-flat downloadButton" href="{escape(href)}">Download APK</a>'
        if href
        else "<p>This release is not available.</p>"
    )
    return f"<html><body><div class='tab-content'>{button}</div></body></html>"


def build_direct_link_page(href: Optional[str]) -> str:
    link = f'<a rel="nofollow" href="{escape(href)}">here</a>' if href else ""
    return (
        "<html><body>"
        f'<div class="card-with-tabs"><p>Your download will start shortly. Click {link}</p></div>'
        "</body></html>"
    )


@pytest.fixture
def listing_page():
    return build_listing_page


@pytest.fixture
def variant_row():
    return build_variant_row


@pytest.fixture
def variants_page():
    return build_variants_page


@pytest.fixture
def download_page():
    return build_download_page


@pytest.fixture
def direct_link_page():
    return build_direct_link_page


@pytest.fixture
def fake_response():
    return FakeResponse
