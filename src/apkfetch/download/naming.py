"""
Artifact naming: filename templates and URI-derived default names.

`name_artifact` is the single naming entry point. A template name is known before
the download starts; a URI-derived name is only known once redirects have been
followed, so the downloader calls the namer with the final URL.
"""

import re
from typing import Dict, Optional
from urllib.parse import unquote, urlparse

from apkfetch.constants import FILENAME_PLACEHOLDER_PATTERN

from .interfaces import VariantRecord

_PLACEHOLDER_RX = re.compile(FILENAME_PLACEHOLDER_PATTERN)


def template_values(
    record: VariantRecord,
    api_level: Optional[int] = None,
    release_version: Optional[str] = None,
) -> Dict[str, str]:
    """Values available to filename templates; absent optional fields become ''."""
    return {
        "version": record.version,
        "variant": record.variant,
        "arch": record.arch,
        "dpi": record.dpi,
        "minSdk": "" if api_level is None else str(api_level),
        "signature": record.signature or "",
        "date": record.date or "",
        "release": release_version or "",
    }


def render_filename(
    template: str,
    record: VariantRecord,
    api_level: Optional[int] = None,
    release_version: Optional[str] = None,
) -> str:
    """
    Substitute `${name}` placeholders in `template`.

    Unknown placeholders are left verbatim.
    """
    values = template_values(record, api_level, release_version)
    return _PLACEHOLDER_RX.sub(
        lambda match: values.get(match.group(1), match.group(0)), template
    )


def filename_from_uri(uri: str) -> str:
    """Last path segment of `uri`, query string stripped and percent-decoded."""
    path = urlparse(uri).path
    segment = path.rsplit("/", 1)[-1]
    return unquote(segment.split("?", 1)[0])


def name_artifact(
    template: Optional[str],
    record: VariantRecord,
    api_level: Optional[int],
    final_uri: str,
    release_version: Optional[str] = None,
) -> str:
    """Render `template` when given, otherwise derive the name from `final_uri`."""
    if template:
        return render_filename(template, record, api_level, release_version)
    return filename_from_uri(final_uri)
