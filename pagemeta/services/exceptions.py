"""Custom exception hierarchy for the service layer"""

from typing import Optional


class ServiceError(Exception):
    """Base exception for all service-related errors"""
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidInputError(ServiceError):
    """Raised when the caller supplies an empty or malformed source before any fetch"""
    def __init__(self, message: str = "Invalid or malformed URL provided"):
        super().__init__(message, "INVALID_INPUT")


class TransportError(ServiceError):
    """Raised when fetching content from a URL fails"""
    def __init__(self, message: str = "Failed to fetch content from URL"):
        super().__init__(message, "TRANSPORT_ERROR")


class FetchTimeoutError(TransportError):
    """Raised when the request does not complete within the configured timeout"""
    def __init__(self, message: str = "Request timed out"):
        super().__init__(message)


class HTTPFetchError(TransportError):
    """Raised when the server answers with an HTTP error status"""
    def __init__(self, status_code: int, url: Optional[str] = None, message: str = None):
        if message is None:
            message = f"HTTP request failed with status code {status_code}"
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class UnsupportedContentTypeError(TransportError):
    """Raised when content type is not supported"""
    def __init__(self, content_type: str):
        message = f"Content type '{content_type}' is not supported"
        super().__init__(message)
        self.content_type = content_type


class InvalidDocumentError(ServiceError):
    """Raised when a fetch succeeded but yielded no usable document"""
    def __init__(self, message: str = "No document was produced for the page"):
        super().__init__(message, "INVALID_DOCUMENT")
