"""
Artifact Downloader

Streams the resolved artifact to disk, honoring the overwrite policy.
"""

import os
import time
from pathlib import Path
from typing import Callable, Optional

import requests

from apkfetch.constants import ARTIFACT_EXTENSIONS, DEFAULT_CHUNK_SIZE
from apkfetch.exceptions import DownloadError, NetworkError
from apkfetch.log_utils import logger

from .interfaces import DocumentFetcher, DownloadResult, Pathish
from .naming import filename_from_uri


def _skip(target: Path, url: Optional[str]) -> DownloadResult:
    logger.info(f"Skipped: {target.name} (already exists and overwrite is disabled)")
    return DownloadResult(
        success=True, file_path=str(target), download_url=url, was_skipped=True
    )


class ArtifactDownloader:
    """Downloads a single artifact to a local file."""

    def __init__(self, fetcher: DocumentFetcher):
        self.fetcher = fetcher

    def download(
        self,
        uri: str,
        filename: Optional[str] = None,
        overwrite: bool = True,
        directory: Optional[Pathish] = None,
        namer: Callable[[str], str] = filename_from_uri,
    ) -> DownloadResult:
        """
        Download `uri` to `directory`/`filename`.

        When `filename` is None the name is `namer(final_url)`, where `final_url` is the
        response URL after redirects. An existing target with `overwrite` disabled is reported as a skip and
        left untouched. The body is written directly to the target; a failed write is not
        cleaned up.

        Returns:
            DownloadResult: `was_skipped` is set for the skip path; otherwise `file_path`
            holds the path actually written.

        Raises:
            DownloadError: If the fetch fails, the response has no body, or the filename
                does not end in a recognized artifact extension.
        """
        base_dir = Path(directory) if directory is not None else Path(".")

        if filename and not overwrite and (base_dir / filename).exists():
            return _skip(base_dir / filename, uri)

        try:
            response = self.fetcher.fetch(uri, stream=True)
        except NetworkError as e:
            raise DownloadError(
                f"Failed to fetch {uri}", url=uri, filename=filename, details=str(e)
            ) from e

        try:
            effective_url = response.url or uri
            name = filename or namer(effective_url)
            target = base_dir / name

            if target.exists() and not overwrite:
                return _skip(target, effective_url)

            if response.raw is None or not name.endswith(ARTIFACT_EXTENSIONS):
                raise DownloadError(
                    "An error occurred while trying to download the file",
                    url=effective_url,
                    filename=name,
                    details=(
                        "response has no body"
                        if response.raw is None
                        else f"expected one of {', '.join(ARTIFACT_EXTENSIONS)}"
                    ),
                )

            logger.debug(f"Downloading {effective_url} to {target}")
            start_time = time.time()
            downloaded_bytes = 0
            try:
                os.makedirs(target.parent, exist_ok=True)
                with open(target, "wb") as file:
                    for chunk in response.iter_content(chunk_size=DEFAULT_CHUNK_SIZE):
                        if chunk:
                            file.write(chunk)
                            downloaded_bytes += len(chunk)
            except requests.RequestException as e:
                raise DownloadError(
                    f"Network error downloading {effective_url}",
                    url=effective_url,
                    filename=name,
                    details=str(e),
                ) from e
            except OSError as e:
                raise DownloadError(
                    f"File I/O error writing {target}",
                    url=effective_url,
                    filename=name,
                    details=str(e),
                ) from e
            logger.debug(
                "Download elapsed time: %.2fs for %s", time.time() - start_time, effective_url
            )
        finally:
            response.close()

        file_size_mb = downloaded_bytes / (1024 * 1024)
        if file_size_mb >= 1.0:
            logger.info(f"Downloaded: {target.name} ({file_size_mb:.1f} MB)")
        else:
            logger.info(f"Downloaded: {target.name} ({downloaded_bytes} bytes)")

        return DownloadResult(
            success=True,
            file_path=str(target),
            download_url=effective_url,
            file_size=downloaded_bytes,
        )
