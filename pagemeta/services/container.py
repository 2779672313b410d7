from typing import Dict, Type, TypeVar
from .url_validator import URLValidator, URLValidatorInterface
from .web_fetcher import WebFetcher, WebFetcherInterface
from .metadata_extractor import MetadataExtractor, MetadataExtractorInterface
from .metadata_service import MetadataService

T = TypeVar('T')


class ServiceContainer:
    """Container for managing service dependencies with dependency injection"""

    def __init__(self):
        self._services: Dict[Type, object] = {}

        # Register services in dependency order
        self._register_services()

    def _register_services(self) -> None:
        """Register all services with proper dependency injection"""
        self._services[URLValidatorInterface] = URLValidator()
        self._services[WebFetcherInterface] = WebFetcher()
        self._services[MetadataExtractorInterface] = MetadataExtractor()

        # Main service that depends on others
        self._services[MetadataService] = MetadataService(
            self._services[URLValidatorInterface],
            self._services[WebFetcherInterface],
            self._services[MetadataExtractorInterface]
        )

    def get_metadata_service(self) -> MetadataService:
        """Get the metadata service instance"""
        return self._services[MetadataService]  # type: ignore

    def get_service(self, interface: Type[T]) -> T:
        """Generic method to retrieve a service by its interface"""
        service = self._services.get(interface)
        if service is None:
            raise ValueError(f"Service for interface {interface.__name__} not found")
        return service  # type: ignore
