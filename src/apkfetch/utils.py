# src/apkfetch/utils.py
import importlib.metadata

from apkfetch.constants import APP_NAME


def get_package_version() -> str:
    """
    Return the installed apkfetch version, or "unknown" when not installed.
    """
    try:
        return importlib.metadata.version(APP_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"
