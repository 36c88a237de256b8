"""
Catalog Resolver

Lists release versions for an app and the variant rows of one release by scraping
the catalog's HTML pages.
"""

import re
from typing import List, Optional

from apkfetch.constants import (
    APKMIRROR_BASE_URL,
    BADGE_APK,
    BADGE_BUNDLE,
    CATALOG_APP_PATH,
    CATALOG_PATH_SEPARATOR,
    CATALOG_RELEASE_PATH,
    DATE_ATTR,
    DATE_SELECTOR,
    SIGNATURE_PATTERN,
    SIGNATURE_SELECTOR,
    SIGNATURE_TOOLTIP_ATTR,
    VARIANT_BADGE_SELECTOR,
    VARIANT_CELL_SELECTOR,
    VARIANT_LINK_SELECTOR,
    VARIANT_REQUIRED_CELLS,
    VARIANT_ROW_SELECTOR,
    VERSION_LIST_SELECTOR,
)
from apkfetch.exceptions import CatalogFormatError, NetworkError
from apkfetch.log_utils import logger

from .interfaces import DocumentFetcher, VariantRecord, VersionEntry
from .markup import Element, extract, parse_document
from .sdk import extract_sdk_text, to_api_level

_SIGNATURE_RX = re.compile(SIGNATURE_PATTERN)


def catalog_url(base_url: str, path: str) -> str:
    """
    Join the catalog origin with an origin-relative path.

    Absolute http(s) URLs are returned unchanged.
    """
    if path.startswith(("http://", "https://")):
        return path
    return base_url.rstrip("/") + path


def release_page_path(org: str, repo: str, version: str) -> str:
    """Build the canonical release page path, e.g. /apk/org/app/app-1-2-3-release."""
    return CATALOG_RELEASE_PATH.format(
        org=org, repo=repo, version=version.replace(".", "-")
    )


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _read_signature(scope: Element) -> Optional[str]:
    element = scope.find_one(SIGNATURE_SELECTOR)
    if element is None:
        return None
    tooltip = element.attr(SIGNATURE_TOOLTIP_ATTR)
    if tooltip:
        match = _SIGNATURE_RX.search(tooltip)
        if match:
            return match.group(1)
    return _optional_text(element.text())


def _read_date(scope: Element) -> Optional[str]:
    element = scope.find_one(DATE_SELECTOR)
    if element is None:
        return None
    return _optional_text(element.attr(DATE_ATTR)) or _optional_text(element.text())


def _has_badge(row: Element, kind: str) -> bool:
    return any(badge.text() == kind for badge in row.find_all(VARIANT_BADGE_SELECTOR))


def parse_variant_row(row: Element) -> Optional[VariantRecord]:
    """
    Build a VariantRecord from one variant table row.

    Returns:
        The record, or None when any of variant, arch, version, dpi or url is empty.
    """
    cells = row.find_all(VARIANT_CELL_SELECTOR)
    values = [cell.text() for cell in cells[: VARIANT_REQUIRED_CELLS - 1]]
    values += [""] * (VARIANT_REQUIRED_CELLS - 1 - len(values))
    variant, arch, version, dpi = values

    url = ""
    if len(cells) >= VARIANT_REQUIRED_CELLS:
        link = cells[VARIANT_REQUIRED_CELLS - 1].find_one(VARIANT_LINK_SELECTOR)
        if link is not None:
            url = (link.attr("href") or "").strip()

    if not (variant and arch and version and dpi and url):
        logger.debug(
            f"Skipped incomplete row: variant={variant!r}, arch={arch!r}, "
            f"version={version!r}, dpi={dpi!r}, url={url!r}"
        )
        return None

    final_cell = cells[-1]
    return VariantRecord(
        variant=variant,
        arch=arch,
        version=version,
        dpi=dpi,
        url=url,
        date=_read_date(final_cell),
        signature=_read_signature(final_cell),
        min_sdk_text=extract_sdk_text(version),
        min_sdk_api_level=to_api_level(version),
    )


class CatalogResolver:
    """
    Reads version listings and variant tables from the catalog.

    Both operations fetch exactly one page. An empty result is returned as an empty
    list; callers decide whether that is an error.
    """

    def __init__(self, fetcher: DocumentFetcher, base_url: str = APKMIRROR_BASE_URL):
        self.fetcher = fetcher
        self.base_url = base_url.rstrip("/")

    def _load(self, url: str) -> Element:
        try:
            response = self.fetcher.fetch(url)
        except NetworkError as e:
            raise CatalogFormatError(
                f"Could not fetch catalog page {url}", url=url, details=str(e)
            ) from e

        markup = response.text
        if not markup or not markup.strip():
            raise CatalogFormatError(f"Catalog page {url} returned no document", url=url)
        return parse_document(markup)

    def list_versions(self, org: str, repo: str) -> List[VersionEntry]:
        """
        List the release versions shown on an app's catalog page.

        Returns:
            List[VersionEntry]: Entries in document order (newest first by catalog convention).
        """
        url = catalog_url(self.base_url, CATALOG_APP_PATH.format(org=org, repo=repo))
        logger.debug(f"Fetching versions from: {url}")
        document = self._load(url)

        entries = []
        for anchor in extract(document, VERSION_LIST_SELECTOR):
            href = anchor.attr("href")
            if not href:
                continue
            entries.append(VersionEntry(display_text=anchor.text(), link_path=href))

        logger.debug(f"Found {len(entries)} version entries for {org}/{repo}")
        return entries

    def list_variants(
        self, org: str, repo: str, version_or_path: str, want_bundle: bool = False
    ) -> List[VariantRecord]:
        """
        List the variants of one release.

        Parameters:
            version_or_path (str): A release page path starting with '/', or a version
                string from which the canonical release path is built.
            want_bundle (bool): Select BUNDLE rows instead of APK rows.

        Returns:
            List[VariantRecord]: Complete rows of the requested kind, in document order.
        """
        if version_or_path.startswith(CATALOG_PATH_SEPARATOR):
            path = version_or_path
        else:
            path = release_page_path(org, repo, version_or_path)
        url = catalog_url(self.base_url, path)
        kind = BADGE_BUNDLE if want_bundle else BADGE_APK

        logger.debug(f"Fetching variants from: {url} (looking for {kind})")
        document = self._load(url)

        rows = [row for row in extract(document, VARIANT_ROW_SELECTOR) if _has_badge(row, kind)]
        logger.debug(f"Found {len(rows)} {kind} rows")

        records = []
        for row in rows:
            record = parse_variant_row(row)
            if record is not None:
                records.append(record)

        logger.debug(f"Total parsed variants: {len(records)}")
        return records
