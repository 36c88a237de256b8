"""
Version and Variant Selection

Pure selection functions. They filter, keep document order, and take the first
survivor. Decisions are reported to an optional trace sink instead of being logged
directly.
"""

import re
from typing import Iterable, List, Optional, Sequence

from apkfetch.constants import PRERELEASE_MARKERS, RELEASE_VERSION_PATTERN
from apkfetch.exceptions import (
    ConfigValidationError,
    NoVariantFoundError,
    NoVersionFoundError,
)
from apkfetch.log_utils import logger

from .interfaces import (
    ResolvedVersion,
    SelectionEvent,
    TraceSink,
    VariantRecord,
    VersionEntry,
)
from .sdk import extract_sdk_text, to_api_level

_RELEASE_VERSION_RX = re.compile(RELEASE_VERSION_PATTERN)


def log_trace_sink(event: SelectionEvent) -> None:
    """Trace sink that writes selection decisions to the debug log."""
    if event.items:
        logger.debug(f"[{event.stage}] {event.message}: {event.count} {event.items}")
    else:
        logger.debug(f"[{event.stage}] {event.message}: {event.count}")


def _emit(
    trace: Optional[TraceSink], stage: str, message: str, items: Iterable = ()
) -> None:
    if trace is None:
        return
    items = list(items)
    trace(SelectionEvent(stage=stage, message=message, count=len(items), items=items))


def extract_release_version(text: str) -> Optional[str]:
    """Return the first dotted-numeric version token in `text` (e.g. '1.2.3-beta'), or None."""
    match = _RELEASE_VERSION_RX.search(text or "")
    return match.group(0) if match else None


def is_prerelease(text: str) -> bool:
    """Literal, case-sensitive check for 'alpha' or 'beta' in a listing label."""
    return any(marker in text for marker in PRERELEASE_MARKERS)


def parse_version_entry(entry: VersionEntry) -> ResolvedVersion:
    """Derive a ResolvedVersion from a listing entry's display text."""
    sdk_text = extract_sdk_text(entry.display_text)
    return ResolvedVersion(
        version_number=extract_release_version(entry.display_text),
        sdk_text=sdk_text,
        sdk_api_level=to_api_level(sdk_text),
        release_path=entry.link_path,
    )


def filter_versions(
    entries: Sequence[VersionEntry],
    pattern: Optional[str] = None,
    include_prerelease: bool = False,
    trace: Optional[TraceSink] = None,
) -> List[VersionEntry]:
    """
    Apply the prerelease filter, then the pattern filter, preserving order.

    Raises:
        ConfigValidationError: If `pattern` is not a valid regular expression.
    """
    candidates = list(entries)
    _emit(trace, "versions", "Found versions (all)", (e.display_text for e in candidates))

    if not include_prerelease:
        candidates = [e for e in candidates if not is_prerelease(e.display_text)]
        _emit(
            trace,
            "versions",
            "Stable versions (no alpha/beta)",
            (e.display_text for e in candidates),
        )

    if pattern:
        try:
            regex = re.compile(pattern)
        except re.error as e:
            raise ConfigValidationError(
                f"Invalid version pattern: {pattern}", details=str(e)
            ) from e
        candidates = [e for e in candidates if regex.search(e.display_text)]
        _emit(
            trace,
            "versions",
            f"Filtered by pattern '{pattern}'",
            (e.display_text for e in candidates),
        )

    return candidates


def select_version(
    entries: Sequence[VersionEntry],
    pattern: Optional[str] = None,
    include_prerelease: bool = False,
    trace: Optional[TraceSink] = None,
) -> ResolvedVersion:
    """
    Pick the release to download from a listing.

    The listing is assumed to be ordered newest first; the first entry surviving the
    filters wins.

    Raises:
        NoVersionFoundError: If no entry survives the filters.
        ConfigValidationError: If `pattern` is not a valid regular expression.
    """
    candidates = filter_versions(entries, pattern, include_prerelease, trace)
    if not candidates:
        raise NoVersionFoundError(pattern)

    resolved = parse_version_entry(candidates[0])
    _emit(
        trace,
        "versions",
        "Selected version",
        [resolved.version_number or candidates[0].display_text],
    )
    return resolved


def _matches(value: str, wanted: str) -> bool:
    return value.lower() == wanted.lower()


def select_variant(
    records: Sequence[VariantRecord],
    arch: Optional[str] = None,
    dpi: Optional[str] = None,
    trace: Optional[TraceSink] = None,
    version: Optional[str] = None,
) -> VariantRecord:
    """
    Pick a variant, narrowing by architecture first and density second.

    `version` only labels the error raised when the release has no variants.

    Raises:
        NoVariantFoundError: If there are no records, or a filter leaves none.
    """
    candidates = list(records)
    _emit(trace, "variants", "Available variants", (r.variant for r in candidates))
    if not candidates:
        raise NoVariantFoundError("version", version)

    if arch:
        candidates = [r for r in candidates if _matches(r.arch, arch)]
        _emit(trace, "variants", f"Filtered by arch '{arch}'", (r.variant for r in candidates))
        if not candidates:
            raise NoVariantFoundError("arch", arch)

    if dpi:
        candidates = [r for r in candidates if _matches(r.dpi, dpi)]
        _emit(trace, "variants", f"Filtered by dpi '{dpi}'", (r.variant for r in candidates))
        if not candidates:
            raise NoVariantFoundError("dpi", dpi)

    selected = candidates[0]
    _emit(
        trace,
        "variants",
        "Selected variant",
        [f"{selected.variant} ({selected.arch}, {selected.dpi})"],
    )
    return selected
