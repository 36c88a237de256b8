"""
Android platform version to API level mapping.
"""

import re
from typing import Dict, Optional

from apkfetch.constants import ANDROID_VERSION_PATTERN

_ANDROID_VERSION_RX = re.compile(ANDROID_VERSION_PATTERN)

# Platform release -> API level. Keep in sync with the Android release history.
API_LEVELS: Dict[str, int] = {
    "1.0": 1,
    "1.1": 2,
    "1.5": 3,
    "1.6": 4,
    "2.0": 5,
    "2.0.1": 6,
    "2.1": 7,
    "2.2": 8,
    "2.2.1": 8,
    "2.2.2": 8,
    "2.2.3": 8,
    "2.3": 9,
    "2.3.1": 9,
    "2.3.2": 9,
    "2.3.3": 10,
    "2.3.4": 10,
    "2.3.5": 10,
    "2.3.6": 10,
    "2.3.7": 10,
    "3.0": 11,
    "3.1": 12,
    "3.2": 13,
    "4.0": 14,
    "4.0.1": 14,
    "4.0.2": 14,
    "4.0.3": 15,
    "4.0.4": 15,
    "4.1": 16,
    "4.2": 17,
    "4.3": 18,
    "4.4": 19,
    "5.0": 21,
    "5.1": 22,
    "6.0": 23,
    "7.0": 24,
    "7.1": 25,
    "8.0": 26,
    "8.1": 27,
    "9": 28,
    "10": 29,
    "11": 30,
    "12": 31,
    "12L": 32,
    "13": 33,
    "14": 34,
    "15": 35,
    "16": 36,
}


def extract_sdk_text(text: Optional[str]) -> Optional[str]:
    """
    Find the first 'Android N' token in free text.

    Returns:
        The matched token without a trailing '+' (e.g. 'Android 8.0'), or None.
    """
    if not text:
        return None
    match = _ANDROID_VERSION_RX.search(text)
    if not match:
        return None
    return f"Android {match.group(1)}"


def to_api_level(text: Optional[str]) -> Optional[int]:
    """
    Map an Android platform version found in `text` to its API level.

    The version token is looked up exactly, then as major.minor, then as major alone.

    Returns:
        The API level, or None when no token is present or every lookup misses.
    """
    if not text:
        return None
    match = _ANDROID_VERSION_RX.search(text)
    if not match:
        return None

    token = match.group(1)
    parts = token.split(".")
    for candidate in (token, ".".join(parts[:2]), parts[0]):
        level = API_LEVELS.get(candidate)
        if level is not None:
            return level
    return None
