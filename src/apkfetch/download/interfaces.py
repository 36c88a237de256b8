"""
Core Interfaces for the apkfetch Download Subsystem

This module defines the data structures passed between the resolution stages and
the transport interface the stages depend on.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import requests

Pathish = Union[str, Path]


@dataclass(frozen=True)
class VersionEntry:
    """One row of the catalog's release listing, in document order."""

    display_text: str
    """Anchor text as shown on the listing (e.g. 'YouTube 19.05.36')"""

    link_path: str
    """Origin-relative path of the release page"""


@dataclass(frozen=True)
class ResolvedVersion:
    """A release version parsed out of a VersionEntry (or given explicitly)."""

    version_number: Optional[str]
    """First dotted-numeric token of the display text; None if there is none"""

    sdk_text: Optional[str] = None
    """'Android N' token found in the display text"""

    sdk_api_level: Optional[int] = None
    """API level mapped from sdk_text"""

    release_path: Optional[str] = None
    """Origin-relative release page path; None when the version was given explicitly"""


@dataclass(frozen=True)
class VariantRecord:
    """One complete row of a release's variant table."""

    variant: str
    arch: str
    version: str
    """Platform version cell text (e.g. 'Android 8.0+')"""

    dpi: str
    url: str
    """Origin-relative path of the variant detail page"""

    date: Optional[str] = None
    signature: Optional[str] = None
    min_sdk_text: Optional[str] = None
    min_sdk_api_level: Optional[int] = None


@dataclass(frozen=True)
class ResolvedRelease:
    """The chosen variant together with the release it belongs to."""

    version: ResolvedVersion
    record: VariantRecord

    @property
    def sdk_api_level(self) -> Optional[int]:
        """Variant-level API level when present, else the version-level value."""
        if self.record.min_sdk_api_level is not None:
            return self.record.min_sdk_api_level
        return self.version.sdk_api_level


@dataclass
class DownloadResult:
    """Result of a download operation."""

    success: bool
    """Whether the download operation succeeded (a skip counts as success)"""

    file_path: Optional[Pathish] = None
    """Path to the downloaded (or skipped) file"""

    download_url: Optional[str] = None
    """Effective URL the artifact was fetched from"""

    file_size: Optional[int] = None
    """Number of bytes written"""

    error_message: Optional[str] = None
    """Error message (if failed)"""

    was_skipped: bool = False
    """Whether an existing file was kept because overwriting was disabled"""


@dataclass
class RunOutcome:
    """Everything a resolution run produced."""

    release: ResolvedRelease
    download: DownloadResult

    @property
    def skipped(self) -> bool:
        return self.download.was_skipped

    def as_outputs(self) -> Dict[str, str]:
        """
        Build the output mapping exposed to callers.

        Returns:
            Dict[str, str]: Empty for a skipped download; otherwise `filename`, `version`,
            `variant`, `arch`, `dpi` plus `minSdk`, `date` and `signature` when available.
        """
        if self.skipped or self.download.file_path is None:
            return {}

        record = self.release.record
        outputs = {
            "filename": str(self.download.file_path),
            "version": self.release.version.version_number or "",
            "variant": record.variant,
            "arch": record.arch,
            "dpi": record.dpi,
        }
        api_level = self.release.sdk_api_level
        if api_level is not None:
            outputs["minSdk"] = str(api_level)
        if record.date:
            outputs["date"] = record.date
        if record.signature:
            outputs["signature"] = record.signature
        return outputs


@dataclass(frozen=True)
class SelectionEvent:
    """A single decision taken by a selector, for tracing."""

    stage: str
    message: str
    count: int = 0
    items: List[Any] = field(default_factory=list)


TraceSink = Callable[[SelectionEvent], None]


class DocumentFetcher(ABC):
    """
    Abstract transport for catalog documents and artifacts.

    Implementations follow redirects and expose the final URL on the returned
    response so callers can derive default filenames from it.
    """

    @abstractmethod
    def fetch(self, url: str, stream: bool = False) -> requests.Response:
        """
        Fetch a URL.

        Parameters:
            url (str): Absolute URL to fetch.
            stream (bool): Defer reading the body so it can be consumed with `iter_content()`.

        Returns:
            requests.Response: Response whose `url` is the post-redirect URL.

        Raises:
            NetworkError: If the request fails or the server answers with an error status.
        """

    def close(self) -> None:
        """Release any transport resources."""
