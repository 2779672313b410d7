import re
from urllib.parse import urlparse
from abc import ABC, abstractmethod

from pagemeta.core.config import settings


PRIVATE_HOST_PATTERNS = [
    re.compile(r"^127\."),
    re.compile(r"^localhost$"),
    re.compile(r"^10\."),
    re.compile(r"^172\.(1[6-9]|2[0-9]|3[0-1])\."),
    re.compile(r"^192\.168\."),
    re.compile(r"^::1$"),
]


class URLValidatorInterface(ABC):
    """Interface for URL validation following the Dependency Inversion Principle"""

    @abstractmethod
    def validate(self, url: str) -> bool:
        """
        Validate a URL to check that it is well formed before any fetch is attempted.

        Args:
            url: The URL string to validate

        Returns:
            True if the URL is valid, False otherwise
        """
        pass


class URLValidator(URLValidatorInterface):
    """
    Validates source URLs.

    Only absolute http(s) URLs with a host and a legal port are accepted. With
    ``block_private_hosts`` loopback and private-network hosts are rejected as well.
    """

    def __init__(self, block_private_hosts: bool = None):
        if block_private_hosts is None:
            block_private_hosts = settings.block_private_hosts
        self.block_private_hosts = block_private_hosts

    def validate(self, url: str) -> bool:
        if not url or not url.strip():
            return False

        try:
            parsed = urlparse(url.strip())
            if parsed.scheme not in ("http", "https"):
                return False
            if not parsed.netloc or not parsed.hostname:
                return False

            # Accessing .port raises ValueError when it is out of range
            if parsed.port is not None and parsed.port < 1:
                return False
        except ValueError:
            return False

        if self.block_private_hosts:
            hostname = parsed.hostname.lower()
            if any(pattern.match(hostname) for pattern in PRIVATE_HOST_PATTERNS):
                return False

        return True
