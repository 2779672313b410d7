import httpx
import pytest
from pagemeta.core.config import FetchConfig
from pagemeta.services.exceptions import (
    TransportError,
    FetchTimeoutError,
    HTTPFetchError,
    UnsupportedContentTypeError,
)
from pagemeta.services.web_fetcher import WebFetcher


PAGE = b"<html><head><title>Test</title></head></html>"


def html_response(status_code=200, content=PAGE, content_type="text/html; charset=utf-8", **kwargs):
    return httpx.Response(status_code, content=content, headers={"content-type": content_type}, **kwargs)


class TestWebFetcher:
    """Unit tests for WebFetcher, backed by httpx.MockTransport"""

    def setup_method(self):
        """Set up test fixtures before each test method."""
        self.config = FetchConfig()
        self.requests = []

    def _fetcher(self, handler):
        def recording_handler(request):
            self.requests.append(request)
            return handler(request)
        return WebFetcher(transport=httpx.MockTransport(recording_handler))

    def test_fetch_returns_page(self):
        # Arrange
        fetcher = self._fetcher(lambda request: html_response())

        # Act
        page = fetcher.fetch_html("https://example.com/page", self.config)

        # Assert
        assert page.content == PAGE
        assert page.status_code == 200
        assert page.url == "https://example.com/page"
        assert page.encoding == "utf-8"
        assert page.content_type.startswith("text/html")

    def test_sends_user_agent_and_referrer(self):
        """Test that the configured headers reach the server."""
        # Arrange
        fetcher = self._fetcher(lambda request: html_response())
        config = FetchConfig(user_agent="TestAgent/1.0", referrer="https://referrer.example")

        # Act
        fetcher.fetch_html("https://example.com", config)

        # Assert
        assert self.requests[0].headers["User-Agent"] == "TestAgent/1.0"
        assert self.requests[0].headers["Referer"] == "https://referrer.example"

    def test_default_headers(self):
        fetcher = self._fetcher(lambda request: html_response())

        fetcher.fetch_html("https://example.com", self.config)

        assert self.requests[0].headers["User-Agent"].startswith("Mozilla/5.0")
        assert self.requests[0].headers["Referer"] == "http://www.google.com"

    def test_follows_redirects_and_reports_final_url(self):
        # Arrange
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(301, headers={"location": "https://example.com/new"})
            return html_response()

        fetcher = self._fetcher(handler)

        # Act
        page = fetcher.fetch_html("https://example.com/old", self.config)

        # Assert
        assert page.url == "https://example.com/new"
        assert len(self.requests) == 2

    def test_redirect_not_followed_when_disabled(self):
        """Test that a 3xx response is returned as-is when redirects are off."""
        # Arrange
        fetcher = self._fetcher(
            lambda request: httpx.Response(302, headers={"location": "https://example.com/new"}, content=b"moved")
        )
        config = FetchConfig(follow_redirects=False)

        # Act
        page = fetcher.fetch_html("https://example.com/old", config)

        # Assert
        assert page.status_code == 302
        assert page.url == "https://example.com/old"
        assert len(self.requests) == 1

    @pytest.mark.parametrize("status_code", [404, 500, 503])
    def test_http_error_raises(self, status_code):
        fetcher = self._fetcher(lambda request: html_response(status_code))

        with pytest.raises(HTTPFetchError) as exc_info:
            fetcher.fetch_html("https://example.com/missing", self.config)

        assert exc_info.value.status_code == status_code
        assert exc_info.value.url == "https://example.com/missing"
        assert exc_info.value.error_code == "TRANSPORT_ERROR"

    def test_http_error_ignored_when_configured(self):
        """Test that error pages are returned when ignore_http_errors is set."""
        fetcher = self._fetcher(lambda request: html_response(404))
        config = FetchConfig(ignore_http_errors=True)

        page = fetcher.fetch_html("https://example.com/missing", config)

        assert page.status_code == 404
        assert page.content == PAGE

    def test_non_html_accepted_by_default(self):
        fetcher = self._fetcher(lambda request: html_response(content=b"{}", content_type="application/json"))

        page = fetcher.fetch_html("https://example.com/data", self.config)

        assert page.content == b"{}"

    @pytest.mark.parametrize("content_type", ["application/json", "image/png", "application/pdf"])
    def test_non_html_rejected_when_strict(self, content_type):
        fetcher = self._fetcher(lambda request: html_response(content=b"x", content_type=content_type))
        config = FetchConfig(ignore_content_type=False)

        with pytest.raises(UnsupportedContentTypeError) as exc_info:
            fetcher.fetch_html("https://example.com/data", config)

        assert exc_info.value.content_type == content_type

    @pytest.mark.parametrize("content_type", [
        "text/html", "text/plain", "application/xhtml+xml", "application/xml",
    ])
    def test_markup_content_types_accepted_when_strict(self, content_type):
        fetcher = self._fetcher(lambda request: html_response(content_type=content_type))
        config = FetchConfig(ignore_content_type=False)

        page = fetcher.fetch_html("https://example.com", config)

        assert page.content == PAGE

    def test_timeout_raises_fetch_timeout_error(self):
        # Arrange
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        fetcher = self._fetcher(handler)

        # Act & Assert
        with pytest.raises(FetchTimeoutError) as exc_info:
            fetcher.fetch_html("https://example.com", self.config)
        assert isinstance(exc_info.value, TransportError)
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    def test_connection_error_raises_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("name resolution failed", request=request)

        fetcher = self._fetcher(handler)

        with pytest.raises(TransportError) as exc_info:
            fetcher.fetch_html("https://unknown.invalid", self.config)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_client_honours_timeout_and_tls_options(self):
        """Test that FetchConfig maps onto the httpx client settings."""
        fetcher = WebFetcher()

        with fetcher._build_client(FetchConfig(timeout_millis=1500, follow_redirects=False)) as client:
            assert client.timeout.read == 1.5
            assert client.follow_redirects is False

        with fetcher._build_client(FetchConfig(timeout_millis=0)) as client:
            assert client.timeout.read is None
