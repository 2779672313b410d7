import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx

from pagemeta.core.config import FetchConfig
from .exceptions import TransportError, FetchTimeoutError, HTTPFetchError, UnsupportedContentTypeError

logger = logging.getLogger(__name__)

# text/*, application/xml and application/*+xml are all parseable as markup
PARSEABLE_CONTENT_TYPE = re.compile(r"^(text/|application/(\S+\+)?xml)", re.IGNORECASE)


@dataclass(frozen=True)
class FetchedPage:
    """Raw response body of a page together with the URL it was finally served from"""
    url: str
    content: bytes
    status_code: int
    content_type: str = ""
    encoding: Optional[str] = None


class WebFetcherInterface(ABC):
    """Interface for fetching web content following the Dependency Inversion Principle"""

    @abstractmethod
    def fetch_html(self, url: str, config: FetchConfig) -> FetchedPage:
        pass


class WebFetcher(WebFetcherInterface):
    """
    Fetches HTML content from URLs with httpx, honouring the transport options of a FetchConfig
    """

    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        # A custom transport lets callers (and tests) replace the network layer
        self.transport = transport

    def _build_client(self, config: FetchConfig) -> httpx.Client:
        headers = {
            "User-Agent": config.user_agent,
            "Referer": config.referrer,
        }
        return httpx.Client(
            headers=headers,
            timeout=config.timeout_seconds,
            follow_redirects=config.follow_redirects,
            verify=config.validate_tls_certificates,
            transport=self.transport,
        )

    def fetch_html(self, url: str, config: FetchConfig) -> FetchedPage:
        """Fetch a page and return its body; raises a TransportError subclass on failure"""
        logger.info(f"Fetching HTML content from URL: {url}")

        try:
            with self._build_client(config) as client:
                res = client.get(url)
        except httpx.TimeoutException as e:
            logger.error(f"Timed out after {config.timeout_millis}ms fetching URL {url}: {e}")
            raise FetchTimeoutError(f"Request to {url} timed out") from e
        except httpx.RequestError as e:
            logger.error(f"Request error occurred while fetching URL {url}: {e}")
            raise TransportError(f"Request error occurred: {e}") from e

        if res.status_code >= 400 and not config.ignore_http_errors:
            logger.error(f"HTTP error {res.status_code} while fetching URL {url}")
            raise HTTPFetchError(status_code=res.status_code, url=str(res.url))

        content_type = res.headers.get("content-type", "")
        if content_type and not config.ignore_content_type:
            if not PARSEABLE_CONTENT_TYPE.match(content_type.strip()):
                logger.warning(f"URL does not return parseable content. Content-Type: {content_type}")
                raise UnsupportedContentTypeError(content_type)

        logger.info(f"Fetched {len(res.content)} bytes from URL: {res.url} (status {res.status_code})")
        return FetchedPage(
            url=str(res.url),
            content=res.content,
            status_code=res.status_code,
            content_type=content_type,
            encoding=res.charset_encoding,
        )
