from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Sequence, Tuple


TITLE_KEYS = ("og:title", "twitter:title", "title")
DESCRIPTION_KEYS = ("og:description", "twitter:description", "description")
URL_KEYS = ("og:url", "url")
IMAGE_KEYS = (
    "og:image",
    "og:image:url",
    "og:image:secure_url",
    "twitter:image",
    "twitter:image:src",
    "image",
)
TYPE_KEYS = ("og:type",)
SITE_NAME_KEYS = ("og:site_name", "twitter:site")
FAVICON_KEYS = ("favicon",)


@dataclass(frozen=True)
class MetadataRecord:
    """
    Read-only metadata for a page, indexed by property name (e.g. og:image or twitter:url).

    Meta tags may repeat a property (several og:image tags), so every property
    maps to a tuple of values in document order, even when only one tag was found.
    """
    properties: Mapping[str, Tuple[str, ...]] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        frozen = {key: tuple(values) for key, values in self.properties.items() if values}
        object.__setattr__(self, "properties", MappingProxyType(frozen))

    def all_properties(self) -> FrozenSet[str]:
        """Every property name present (e.g. og:title, twitter:url, favicon)."""
        return frozenset(self.properties)

    def has_content(self, key: str) -> bool:
        return key in self.properties

    def get_content(self, key: str) -> Tuple[str, ...]:
        """All values stored under ``key``; an empty tuple when absent."""
        return self.properties.get(key, ())

    def _first_key(self, keys: Sequence[str]) -> Optional[str]:
        for key in keys:
            if key in self.properties:
                return key
        return None

    def _first_value(self, keys: Sequence[str]) -> Optional[str]:
        key = self._first_key(keys)
        return self.properties[key][0] if key is not None else None

    def has_title(self) -> bool:
        return self._first_key(TITLE_KEYS) is not None

    def get_title(self) -> Optional[str]:
        """First value of og:title, twitter:title or title, in that order."""
        return self._first_value(TITLE_KEYS)

    def has_description(self) -> bool:
        return self._first_key(DESCRIPTION_KEYS) is not None

    def get_description(self) -> Optional[str]:
        """First value of og:description, twitter:description or description, in that order."""
        return self._first_value(DESCRIPTION_KEYS)

    def has_url(self) -> bool:
        return self._first_key(URL_KEYS) is not None

    def get_url(self) -> Optional[str]:
        """og:url, falling back to the canonical url."""
        return self._first_value(URL_KEYS)

    def has_images(self) -> bool:
        return self._first_key(IMAGE_KEYS) is not None

    def get_images(self) -> Tuple[str, ...]:
        """
        All images stored under the first present key among og:image, og:image:url,
        og:image:secure_url, twitter:image, twitter:image:src and image.
        """
        key = self._first_key(IMAGE_KEYS)
        return self.properties[key] if key is not None else ()

    def has_type(self) -> bool:
        return self._first_key(TYPE_KEYS) is not None

    def get_type(self) -> Optional[str]:
        return self._first_value(TYPE_KEYS)

    def has_site_name(self) -> bool:
        return self._first_key(SITE_NAME_KEYS) is not None

    def get_site_name(self) -> Optional[str]:
        """og:site_name, falling back to twitter:site."""
        return self._first_value(SITE_NAME_KEYS)

    def has_favicon(self) -> bool:
        return self._first_key(FAVICON_KEYS) is not None

    def get_favicon(self) -> Optional[str]:
        return self._first_value(FAVICON_KEYS)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a dictionary representation"""
        return {
            "title": self.get_title(),
            "description": self.get_description(),
            "url": self.get_url(),
            "images": list(self.get_images()),
            "type": self.get_type(),
            "site_name": self.get_site_name(),
            "favicon": self.get_favicon(),
            "properties": {key: list(values) for key, values in self.properties.items()},
        }
