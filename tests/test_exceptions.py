"""Tests for the apkfetch exception hierarchy."""

import pytest

from apkfetch.exceptions import (
    ApkfetchError,
    CatalogFormatError,
    ConfigFileError,
    ConfigurationError,
    ConfigValidationError,
    DownloadError,
    LinkNotFoundError,
    NetworkError,
    NoVariantFoundError,
    NoVersionFoundError,
)

pytestmark = [pytest.mark.unit]


class TestApkfetchError:
    def test_message_only(self):
        error = ApkfetchError("Something failed")

        assert str(error) == "Something failed"
        assert error.details is None

    def test_message_with_details(self):
        error = ApkfetchError("Something failed", details="disk full")

        assert str(error) == "Something failed - disk full"


@pytest.mark.parametrize(
    "error",
    [
        ConfigurationError("x"),
        ConfigFileError("x"),
        ConfigValidationError("x"),
        NetworkError("x"),
        CatalogFormatError("x"),
        NoVersionFoundError(),
        NoVariantFoundError("arch"),
        LinkNotFoundError("direct-link"),
        DownloadError("x"),
    ],
)
def test_all_errors_share_base(error):
    assert isinstance(error, ApkfetchError)


def test_config_errors_are_configuration_errors():
    assert issubclass(ConfigFileError, ConfigurationError)
    assert issubclass(ConfigValidationError, ConfigurationError)


def test_network_error_attributes():
    error = NetworkError("HTTP error", url="https://x", status_code=503, details="busy")

    assert error.url == "https://x"
    assert error.status_code == 503
    assert str(error) == "HTTP error - busy"


def test_no_version_found_message():
    assert str(NoVersionFoundError()) == "Could not find version matching pattern: any"
    assert str(NoVersionFoundError("^1\\.")) == "Could not find version matching pattern: ^1\\."


def test_no_variant_found_message():
    error = NoVariantFoundError("dpi", "480dpi")

    assert error.criterion == "dpi"
    assert str(error) == "No variant found for dpi: 480dpi"


def test_link_not_found_message():
    error = LinkNotFoundError("download-page", url="https://x/page")

    assert error.url == "https://x/page"
    assert str(error) == "Could not find download-page link"


def test_download_error_attributes():
    error = DownloadError("boom", url="https://x/a.apk", filename="a.apk")

    assert error.url == "https://x/a.apk"
    assert error.filename == "a.apk"
