"""
Download gateway link chain.

A variant detail page links to an intermediate download page, whose tabbed
download panel links to the file itself.
"""

from apkfetch.constants import (
    APKMIRROR_BASE_URL,
    DOWNLOAD_BUTTON_SELECTOR,
    DOWNLOAD_TABS_LINK_SELECTOR,
    STAGE_DIRECT_LINK,
    STAGE_DOWNLOAD_PAGE,
)
from apkfetch.exceptions import LinkNotFoundError
from apkfetch.log_utils import logger

from .catalog import catalog_url
from .interfaces import DocumentFetcher
from .markup import parse_document


class LinkChainResolver:
    """Follows the two gateway hops from a variant page to a direct file URI."""

    def __init__(self, fetcher: DocumentFetcher, base_url: str = APKMIRROR_BASE_URL):
        self.fetcher = fetcher
        self.base_url = base_url.rstrip("/")

    def _follow(self, path: str, query: str, stage: str) -> str:
        url = catalog_url(self.base_url, path)
        response = self.fetcher.fetch(url)
        link = parse_document(response.text).find_one(query)
        href = link.attr("href") if link is not None else None
        if not href:
            raise LinkNotFoundError(stage, url=url)
        logger.debug(f"Resolved {stage} link: {href}")
        return href

    def resolve(self, variant_page_path: str) -> str:
        """
        Resolve a variant page to the artifact's direct URI.

        Raises:
            LinkNotFoundError: If either hop's page lacks its expected link.
            NetworkError: If a gateway page cannot be fetched.
        """
        download_page = self._follow(
            variant_page_path, DOWNLOAD_BUTTON_SELECTOR, STAGE_DOWNLOAD_PAGE
        )
        direct_path = self._follow(
            download_page, DOWNLOAD_TABS_LINK_SELECTOR, STAGE_DIRECT_LINK
        )
        return catalog_url(self.base_url, direct_path)
