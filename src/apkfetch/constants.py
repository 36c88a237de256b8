"""
Constants and configuration values for apkfetch.

This module contains all hardcoded values, URLs, selectors, timeouts, and other
constants used throughout the application.
"""

# Catalog origin
APKMIRROR_BASE_URL = "https://www.apkmirror.com"
CATALOG_APP_PATH = "/apk/{org}/{repo}"
CATALOG_RELEASE_PATH = "/apk/{org}/{repo}/{repo}-{version}-release"
CATALOG_PATH_SEPARATOR = "/"

# Markup selectors for the catalog pages
VERSION_LIST_SELECTOR = (
    "#primary > div.listWidget.p-relative > div > div.appRow > div"
    " > div:nth-child(2) > div > h5 > a"
)
VARIANT_ROW_SELECTOR = ".variants-table .table-row"
VARIANT_BADGE_SELECTOR = "span.apkm-badge"
VARIANT_CELL_SELECTOR = ".table-cell"
VARIANT_LINK_SELECTOR = "a"
SIGNATURE_SELECTOR = ".signature"
SIGNATURE_TOOLTIP_ATTR = "title"
DATE_SELECTOR = ".datetime_utc"
DATE_ATTR = "data-utcdate"
DOWNLOAD_BUTTON_SELECTOR = "a.downloadButton"
DOWNLOAD_TABS_LINK_SELECTOR = ".card-with-tabs a[href]"

# Variant table columns (variant, arch, platform version, dpi, download link)
VARIANT_REQUIRED_CELLS = 5

# Badge labels for the two packaging kinds
BADGE_APK = "APK"
BADGE_BUNDLE = "BUNDLE"

# Link chain stages
STAGE_DOWNLOAD_PAGE = "download-page"
STAGE_DIRECT_LINK = "direct-link"

# Free-text parsing patterns
RELEASE_VERSION_PATTERN = r"\b\d+(?:\.\d+)+(?:-\S+)?\b"
ANDROID_VERSION_PATTERN = r"Android (\d+(?:\.\d+)*L?)\+?"
SIGNATURE_PATTERN = r"Signature: ([0-9a-fA-F]+)"
PRERELEASE_MARKERS = ("alpha", "beta")

# Filename template placeholders
FILENAME_PLACEHOLDER_PATTERN = r"\$\{(\w+)\}"

# Network settings (in seconds)
DEFAULT_REQUEST_TIMEOUT = 30
DEFAULT_CHUNK_SIZE = 8192
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/118.0.0.0 Safari/537.36"
)
BROWSER_ACCEPT_HEADER = (
    "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
)
BROWSER_ACCEPT_LANGUAGE = "en-US,en;q=0.9"

# Recognized artifact extensions
APK_EXTENSION = ".apk"
APKM_EXTENSION = ".apkm"
ARTIFACT_EXTENSIONS = (APK_EXTENSION, APKM_EXTENSION)

# Configuration file names
APP_NAME = "apkfetch"
CONFIG_FILE_NAME = "apkfetch.yaml"

# GitHub Actions integration
ACTIONS_INPUT_PREFIX = "INPUT_"
ACTIONS_OUTPUT_ENV_VAR = "GITHUB_OUTPUT"

# Logging configuration
LOGGER_NAME = "apkfetch"
LOG_FILE_NAME = "apkfetch.log"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
INFO_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s: %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_FILE_BACKUP_COUNT = 5

# Environment variable names
LOG_LEVEL_ENV_VAR = "APKFETCH_LOG_LEVEL"
