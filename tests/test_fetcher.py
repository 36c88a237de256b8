from unittest.mock import MagicMock

import pytest
import requests

from apkfetch.constants import BROWSER_USER_AGENT
from apkfetch.download.fetcher import HttpDocumentFetcher
from apkfetch.exceptions import NetworkError

pytestmark = [pytest.mark.unit]

URL = "https://www.apkmirror.com/apk/org/app/"


@pytest.fixture
def session():
    mock_session = MagicMock(spec=requests.Session)
    mock_session.headers = {}
    return mock_session


class TestHttpDocumentFetcher:
    def test_sets_browser_headers(self, session):
        HttpDocumentFetcher(session=session)

        assert "Mozilla" in session.headers["User-Agent"]
        assert session.headers["User-Agent"] == BROWSER_USER_AGENT
        assert "text/html" in session.headers["Accept"]
        assert "Accept-Language" in session.headers

    def test_fetch_follows_redirects_with_timeout(self, session):
        response = MagicMock(status_code=200, url=URL)
        session.get.return_value = response
        fetcher = HttpDocumentFetcher(session=session, timeout=5)

        assert fetcher.fetch(URL, stream=True) is response

        session.get.assert_called_once_with(
            URL, stream=True, timeout=5, allow_redirects=True
        )
        response.raise_for_status.assert_called_once()

    def test_http_error_becomes_network_error(self, session):
        error_response = MagicMock(status_code=404)
        response = MagicMock(status_code=404, url=URL)
        response.raise_for_status.side_effect = requests.HTTPError(
            "404 Client Error", response=error_response
        )
        session.get.return_value = response

        with pytest.raises(NetworkError) as exc_info:
            HttpDocumentFetcher(session=session).fetch(URL)

        assert exc_info.value.status_code == 404
        assert exc_info.value.url == URL
        response.close.assert_called_once()

    @pytest.mark.parametrize(
        "error",
        [requests.ConnectionError("refused"), requests.Timeout("slow")],
    )
    def test_transport_error_becomes_network_error(self, session, error):
        session.get.side_effect = error

        with pytest.raises(NetworkError, match="Network error fetching") as exc_info:
            HttpDocumentFetcher(session=session).fetch(URL)

        assert exc_info.value.status_code is None

    def test_injected_session_is_not_closed(self, session):
        HttpDocumentFetcher(session=session).close()

        session.close.assert_not_called()

    def test_owned_session_is_closed(self, mocker):
        mock_session_cls = mocker.patch("apkfetch.download.fetcher.requests.Session")
        mock_session_cls.return_value.headers = {}

        with HttpDocumentFetcher() as fetcher:
            assert fetcher.session is mock_session_cls.return_value

        mock_session_cls.return_value.close.assert_called_once()

    def test_owned_session_sends_browser_user_agent(self):
        with HttpDocumentFetcher() as fetcher:
            user_agent = fetcher.session.headers["User-Agent"]

        assert user_agent.startswith("Mozilla/5.0")
        assert "apkfetch" not in user_agent
