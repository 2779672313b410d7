"""
pagemeta: Open Graph, Twitter Card and HTML metadata extraction.

Public API surface:
  Entry points: extract (fetch a URL), extract_html (markup already in hand)
  Data models: MetadataRecord, FetchConfig
  Error types: ServiceError and its subclasses
"""

from typing import Optional, Union

from .core.config import FetchConfig
from .core.models import MetadataRecord
from .services.container import ServiceContainer
from .services.exceptions import (
    ServiceError,
    InvalidInputError,
    TransportError,
    FetchTimeoutError,
    HTTPFetchError,
    UnsupportedContentTypeError,
    InvalidDocumentError,
)

__version__ = "1.0.0"

# All services are stateless, so one container serves every call
_container = ServiceContainer()


def extract(url: str, config: Optional[FetchConfig] = None) -> MetadataRecord:
    """Fetch ``url`` and return its metadata."""
    return _container.get_metadata_service().get_metadata(url, config)


def extract_html(html: Union[str, bytes], url: Optional[str] = None) -> MetadataRecord:
    """Return the metadata of an already fetched page."""
    return _container.get_metadata_service().extract_html(html, url)


__all__ = [
    "extract",
    "extract_html",
    "FetchConfig",
    "MetadataRecord",
    "ServiceContainer",
    "ServiceError",
    "InvalidInputError",
    "TransportError",
    "FetchTimeoutError",
    "HTTPFetchError",
    "UnsupportedContentTypeError",
    "InvalidDocumentError",
]
