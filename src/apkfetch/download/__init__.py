"""
apkfetch Download Subsystem

Resolves a catalog release into a single downloaded artifact.

Core Components:
- interfaces: Data model and the DocumentFetcher transport interface
- fetcher: requests-based DocumentFetcher
- markup: Structural queries over parsed HTML
- catalog: Version listings and variant tables
- sdk: Android platform version to API level mapping
- selection: Version and variant selection
- links: Download gateway link chain
- naming: Filename templates
- downloader: Artifact download
- orchestrator: End-to-end run coordination
"""

from .catalog import CatalogResolver
from .downloader import ArtifactDownloader
from .fetcher import HttpDocumentFetcher
from .interfaces import (
    DocumentFetcher,
    DownloadResult,
    ResolvedRelease,
    ResolvedVersion,
    RunOutcome,
    SelectionEvent,
    VariantRecord,
    VersionEntry,
)
from .links import LinkChainResolver
from .markup import Element, extract, parse_document
from .naming import filename_from_uri, name_artifact, render_filename
from .orchestrator import ReleaseDownloadOrchestrator
from .sdk import to_api_level
from .selection import select_variant, select_version

__all__ = [
    # Interfaces
    "DocumentFetcher",
    "DownloadResult",
    "ResolvedRelease",
    "ResolvedVersion",
    "RunOutcome",
    "SelectionEvent",
    "VariantRecord",
    "VersionEntry",
    # Components
    "ArtifactDownloader",
    "CatalogResolver",
    "HttpDocumentFetcher",
    "LinkChainResolver",
    "ReleaseDownloadOrchestrator",
    # Functions
    "Element",
    "extract",
    "filename_from_uri",
    "name_artifact",
    "parse_document",
    "render_filename",
    "select_variant",
    "select_version",
    "to_api_level",
]
