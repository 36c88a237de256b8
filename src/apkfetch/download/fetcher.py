"""
HTTP Document Fetcher

requests-based implementation of the DocumentFetcher interface used for catalog
pages, gateway pages and the final artifact.
"""

from typing import Optional

import requests

from apkfetch.constants import (
    BROWSER_ACCEPT_HEADER,
    BROWSER_ACCEPT_LANGUAGE,
    BROWSER_USER_AGENT,
    DEFAULT_REQUEST_TIMEOUT,
)
from apkfetch.exceptions import NetworkError
from apkfetch.log_utils import logger

from .interfaces import DocumentFetcher


class HttpDocumentFetcher(DocumentFetcher):
    """
    Fetch documents over HTTP with a shared session.

    Redirects are followed by requests, so `response.url` is the effective URL.
    Failed requests are not retried.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        """
        Parameters:
            session (Optional[requests.Session]): Session to use; a new one is created (and owned) when omitted.
            timeout (float): Per-request timeout in seconds.
        """
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout
        self.session.headers.update(
            {
                "User-Agent": BROWSER_USER_AGENT,
                "Accept": BROWSER_ACCEPT_HEADER,
                "Accept-Language": BROWSER_ACCEPT_LANGUAGE,
            }
        )

    def __enter__(self) -> "HttpDocumentFetcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch(self, url: str, stream: bool = False) -> requests.Response:
        """
        GET `url`, following redirects.

        Raises:
            NetworkError: On connection failures, timeouts or HTTP error statuses.
        """
        logger.debug(f"Fetching {url}")
        response = None
        try:
            response = self.session.get(
                url, stream=stream, timeout=self.timeout, allow_redirects=True
            )
            logger.debug(
                f"Received HTTP response status code: {response.status_code} for URL: {url}"
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if response is not None:
                response.close()
            raise NetworkError(
                f"HTTP error fetching {url}", url=url, status_code=status, details=str(e)
            ) from e
        except requests.RequestException as e:
            raise NetworkError(f"Network error fetching {url}", url=url, details=str(e)) from e

        if response.url and response.url != url:
            logger.debug(f"Redirected to {response.url}")
        return response

    def close(self) -> None:
        if self._owns_session:
            self.session.close()
