"""
Custom exceptions for the apkfetch application.

Every failure in a resolution run is raised as one of these and propagates to the
entry point, which reports it and exits non-zero. A skipped download (existing file
with overwrite disabled) is not an error and never raises.
"""


class ApkfetchError(Exception):
    """
    Base exception for all apkfetch errors.

    All custom exceptions in apkfetch inherit from this class so the CLI can catch
    every application-specific failure in one place.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """
        Initialize the exception.

        Args:
            message: The primary error message.
            details: Optional additional context about the error.
        """
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ApkfetchError):
    """
    Exception raised when configuration is invalid or missing.

    This includes:
    - Missing required inputs (org, repo)
    - Invalid input values (booleans, timeouts, regular expressions)
    - Configuration file parsing errors
    """

    pass


class ConfigFileError(ConfigurationError):
    """Exception raised when configuration file cannot be read or parsed."""

    pass


class ConfigValidationError(ConfigurationError):
    """Exception raised when configuration validation fails."""

    pass


# =============================================================================
# Network Errors
# =============================================================================


class NetworkError(ApkfetchError):
    """
    Exception raised when a document or artifact cannot be fetched.

    Attributes:
        url: The URL that was being fetched.
        status_code: The HTTP status code, when the server answered.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


# =============================================================================
# Catalog Errors
# =============================================================================


class CatalogFormatError(ApkfetchError):
    """
    Exception raised when a listing or variant page is unreachable or unparseable.

    Attributes:
        url: The catalog page URL.
    """

    def __init__(
        self, message: str, url: str | None = None, details: str | None = None
    ) -> None:
        super().__init__(message, details)
        self.url = url


class NoVersionFoundError(ApkfetchError):
    """
    Exception raised when no version entry survives prerelease and pattern filtering.

    Attributes:
        pattern: The attempted version pattern, or "any" when none was given.
    """

    def __init__(self, pattern: str | None = None, details: str | None = None) -> None:
        self.pattern = pattern or "any"
        super().__init__(
            f"Could not find version matching pattern: {self.pattern}", details
        )


class NoVariantFoundError(ApkfetchError):
    """
    Exception raised when no variant record survives filtering.

    Attributes:
        criterion: The filter that emptied the set ("arch" or "dpi"), or
            "version" when the release lists no variants at all.
        value: The attempted filter value.
    """

    def __init__(
        self,
        criterion: str,
        value: str | None = None,
        details: str | None = None,
    ) -> None:
        self.criterion = criterion
        self.value = value or "any"
        super().__init__(f"No variant found for {criterion}: {self.value}", details)


class LinkNotFoundError(ApkfetchError):
    """
    Exception raised when a download gateway page lacks its expected link.

    Attributes:
        stage: The gateway hop that failed ("download-page" or "direct-link").
        url: The page that was searched.
    """

    def __init__(
        self, stage: str, url: str | None = None, details: str | None = None
    ) -> None:
        self.stage = stage
        self.url = url
        super().__init__(f"Could not find {stage} link", details)


# =============================================================================
# Download Errors
# =============================================================================


class DownloadError(ApkfetchError):
    """
    Exception raised when the terminal artifact download cannot be completed.

    Attributes:
        url: The artifact URL.
        filename: The destination filename, when known.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        filename: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url
        self.filename = filename
