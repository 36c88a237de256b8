"""
Download Orchestration

Runs one resolution end to end:

    list versions -> select version -> list variants -> select variant
    -> resolve gateway links -> name artifact -> download

Each step's request depends on the previous step's result, so the steps run
strictly in sequence and the first failure ends the run.
"""

from functools import partial
from typing import List, Optional

from apkfetch.config import DownloadConfig, default_output_dir
from apkfetch.log_utils import logger

from .catalog import CatalogResolver
from .downloader import ArtifactDownloader
from .fetcher import HttpDocumentFetcher
from .interfaces import (
    DocumentFetcher,
    ResolvedRelease,
    ResolvedVersion,
    RunOutcome,
    TraceSink,
    VersionEntry,
)
from .links import LinkChainResolver
from .naming import name_artifact
from .selection import filter_versions, log_trace_sink, select_variant, select_version


class ReleaseDownloadOrchestrator:
    """
    Resolve and download one catalog artifact described by a DownloadConfig.

    The orchestrator owns the fetcher it creates and closes it on `close()` or
    when used as a context manager; an injected fetcher is left open for its owner.
    """

    def __init__(
        self,
        config: DownloadConfig,
        fetcher: Optional[DocumentFetcher] = None,
        trace: Optional[TraceSink] = log_trace_sink,
    ):
        self.config = config
        self._owns_fetcher = fetcher is None
        self.fetcher: DocumentFetcher = fetcher or HttpDocumentFetcher(
            timeout=config.request_timeout
        )
        self.trace = trace
        self.catalog = CatalogResolver(self.fetcher, config.base_url)
        self.links = LinkChainResolver(self.fetcher, config.base_url)
        self.downloader = ArtifactDownloader(self.fetcher)

    def __enter__(self) -> "ReleaseDownloadOrchestrator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_fetcher:
            self.fetcher.close()

    def list_versions(self) -> List[VersionEntry]:
        """Version entries surviving the configured prerelease and pattern filters."""
        entries = self.catalog.list_versions(self.config.org, self.config.repo)
        return filter_versions(
            entries,
            self.config.version_pattern,
            self.config.include_prerelease,
            self.trace,
        )

    def resolve_version(self) -> ResolvedVersion:
        """
        Resolve the release to download.

        An explicit version is used as-is; pattern and prerelease settings only apply
        when the version is detected from the listing.
        """
        if self.config.version:
            return ResolvedVersion(version_number=self.config.version)

        entries = self.catalog.list_versions(self.config.org, self.config.repo)
        return select_version(
            entries,
            self.config.version_pattern,
            self.config.include_prerelease,
            self.trace,
        )

    def resolve(self) -> ResolvedRelease:
        """
        Resolve the release and variant without downloading anything.

        Raises:
            CatalogFormatError, NoVersionFoundError, NoVariantFoundError
        """
        config = self.config
        version = self.resolve_version()
        logger.info(f"Selected version: {version.version_number or '(unknown)'}")

        if version.release_path:
            version_or_path = version.release_path
        else:
            version_or_path = version.version_number or ""

        records = self.catalog.list_variants(
            config.org, config.repo, version_or_path, config.bundle
        )
        record = select_variant(
            records,
            config.arch,
            config.dpi,
            self.trace,
            version=version.version_number or version_or_path,
        )
        logger.info(f"Using variant: {record.variant} ({record.arch}, {record.dpi})")
        return ResolvedRelease(version=version, record=record)

    def run(self) -> RunOutcome:
        """
        Resolve, follow the gateway chain and download the artifact.

        Returns:
            RunOutcome: The resolved release and the download result (which may be a skip).
        """
        config = self.config
        logger.info(f"Org: {config.org}, Repo: {config.repo}")
        logger.info(
            f"Version: {config.version or '(auto-detect)'}, "
            f"Pattern: {config.version_pattern or '(none)'}"
        )
        logger.info(
            f"Include Prerelease: {config.include_prerelease}, Bundle: {config.bundle}, "
            f"Filename: {config.filename or '(auto)'}"
        )

        release = self.resolve()
        direct_uri = self.links.resolve(release.record.url)
        logger.debug(f"Direct download URL: {direct_uri}")

        namer = partial(
            name_artifact,
            config.filename,
            release.record,
            release.sdk_api_level,
            release_version=release.version.version_number,
        )
        # a template name does not depend on the URI
        filename = namer(direct_uri) if config.filename else None

        result = self.downloader.download(
            direct_uri,
            filename=filename,
            overwrite=config.overwrite,
            directory=default_output_dir(config),
            namer=namer,
        )

        return RunOutcome(release=release, download=result)
