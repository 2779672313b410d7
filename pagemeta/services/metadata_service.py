import logging
from typing import Optional, Union

from pagemeta.core.config import FetchConfig
from pagemeta.core.models import MetadataRecord
from .exceptions import InvalidDocumentError, InvalidInputError
from .html_parser import HTMLDocument
from .metadata_extractor import MetadataExtractorInterface
from .url_validator import URLValidatorInterface
from .web_fetcher import WebFetcherInterface

logger = logging.getLogger(__name__)


class MetadataService:
    """
    Main service for metadata operations: validate, fetch, parse, extract
    """

    def __init__(
        self,
        url_validator: URLValidatorInterface,
        web_fetcher: WebFetcherInterface,
        metadata_extractor: MetadataExtractorInterface,
    ):
        self.url_validator = url_validator
        self.web_fetcher = web_fetcher
        self.metadata_extractor = metadata_extractor

    def get_metadata(self, url: str, config: Optional[FetchConfig] = None) -> MetadataRecord:
        """
        Fetch a page and extract its metadata.

        Args:
            url: The URL to extract metadata from
            config: Transport options; the environment defaults are used when omitted

        Returns:
            MetadataRecord for the page

        Raises:
            InvalidInputError: If the URL is empty or malformed (no request is made)
            TransportError: If the page could not be fetched
            InvalidDocumentError: If the response carried no document
        """
        if not url or not url.strip():
            logger.warning("Empty or whitespace-only URL provided")
            raise InvalidInputError("URL is required")

        url = url.strip()
        if not self.url_validator.validate(url):
            logger.warning(f"Invalid URL provided: {url}")
            raise InvalidInputError(f"Invalid or malformed URL provided: {url}")

        if config is None:
            config = FetchConfig.from_settings()

        page = self.web_fetcher.fetch_html(url, config)
        logger.info(
            f"Parsing response from {page.url} (status {page.status_code}, "
            f"content type '{page.content_type or 'unknown'}')"
        )

        if not page.content or not page.content.strip():
            logger.error(f"Empty response body for URL: {page.url}")
            raise InvalidDocumentError(f"Response from {page.url} contained no document")

        document = HTMLDocument(page.content, url=page.url, encoding=page.encoding)
        return self.metadata_extractor.extract(document)

    def extract_html(self, html: Union[str, bytes], url: Optional[str] = None) -> MetadataRecord:
        """
        Extract metadata from HTML the caller already holds.

        Args:
            html: Page markup
            url: Optional page URL, used to resolve relative image links

        Raises:
            InvalidDocumentError: If ``html`` is None
        """
        if html is None:
            raise InvalidDocumentError("No HTML was provided")

        logger.debug(f"Extracting metadata from {len(html)} characters of HTML")
        document = HTMLDocument(html, url=url)
        return self.metadata_extractor.extract(document)
