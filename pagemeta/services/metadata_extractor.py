import logging
import re
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional
from urllib.parse import urlparse

from pagemeta.core.models import MetadataRecord
from .exceptions import InvalidDocumentError
from .html_parser import HTMLDocument


logger = logging.getLogger(__name__)

# Structured vocabularies kept by the meta scan; anything else is page noise
PREFIXES = ("og:", "music:", "video:", "article:", "book:", "profile:", "twitter:")

IMAGE_SUFFIXES = (".png", ".jpeg", ".jpg")

FAVICON_HREF = re.compile(r"\.(ico|png)$", re.IGNORECASE)


class MetadataExtractorInterface(ABC):
    """Interface for metadata extraction following the Dependency Inversion Principle"""

    @abstractmethod
    def extract(self, document: HTMLDocument) -> MetadataRecord:
        pass


class MetadataExtractor(MetadataExtractorInterface):
    """
    Extracts Open Graph, Twitter Card and related metadata from a parsed document.

    The meta scan keeps every value in document order, so repeated properties such
    as og:image end up as multi-valued entries. When the title, description, url or
    image vocabularies are missing entirely, plain HTML sources are used instead and
    stored under the bare keys title, description, url and image. A favicon lookup
    always runs.
    """

    def extract(self, document: Optional[HTMLDocument]) -> MetadataRecord:
        if document is None:
            raise InvalidDocumentError("Cannot extract metadata without a document")

        logger.info(f"Extracting metadata from document: {document.url or '<inline>'}")

        meta_contents = self._scan_meta_tags(document)
        self._handle_fallbacks(document, meta_contents)
        self._fetch_favicon(document, meta_contents)

        logger.info(f"Extracted {len(meta_contents)} properties from document: {document.url or '<inline>'}")
        return MetadataRecord(meta_contents)

    def _scan_meta_tags(self, document: HTMLDocument) -> Dict[str, List[str]]:
        meta_contents: Dict[str, List[str]] = {}

        for meta_tag in document.find_all("meta"):
            key = document.attr(meta_tag, "property")
            if key is None:
                key = document.attr(meta_tag, "name")
            if key is None or not key.startswith(PREFIXES):
                continue

            value = document.attr(meta_tag, "content")
            if value is None:
                value = document.attr(meta_tag, "value")
            if not value:
                continue

            meta_contents.setdefault(key, []).append(value)

        logger.debug(f"Meta scan found keys: {sorted(meta_contents)}")
        return meta_contents

    def _handle_fallbacks(self, document: HTMLDocument, meta_contents: Dict[str, List[str]]) -> None:
        """Fill title, description, url and image from plain HTML when their vocabularies are absent"""
        if not self._has_any(meta_contents, "og:title", "twitter:title"):
            self._put_single(meta_contents, "title", document.title)

        if not self._has_any(meta_contents, "og:description", "twitter:description"):
            self._put_single(
                meta_contents, "description",
                lambda: document.first_attr('meta[name="description" i]', "content")
            )

        if not self._has_any(meta_contents, "og:url"):
            self._put_single(
                meta_contents, "url",
                lambda: document.first_attr('link[rel="canonical" i]', "href")
            )

        if not self._has_any(meta_contents, "og:image", "og:image:url", "og:image:secure_url",
                             "twitter:image", "twitter:image:src"):
            self._put_single(meta_contents, "image", lambda: self._first_page_image(document))

    def _first_page_image(self, document: HTMLDocument) -> str:
        for img in document.find_all("img"):
            src = document.abs_url(img, "src")
            if src.lower().endswith(IMAGE_SUFFIXES):
                return src
        return ""

    def _fetch_favicon(self, document: HTMLDocument, meta_contents: Dict[str, List[str]]) -> None:
        def find_favicon() -> str:
            for link in document.find_all("link"):
                href = document.attr(link, "href")
                if not href:
                    continue
                try:
                    path = urlparse(href.strip()).path
                except ValueError:
                    logger.debug(f"Skipping link with malformed href: {href}")
                    continue
                if FAVICON_HREF.search(path):
                    return href
            return ""

        self._put_single(meta_contents, "favicon", find_favicon)

    @staticmethod
    def _has_any(meta_contents: Dict[str, List[str]], *keys: str) -> bool:
        return any(key in meta_contents for key in keys)

    @staticmethod
    def _put_single(meta_contents: Dict[str, List[str]], key: str, supplier: Callable[[], str]) -> None:
        value = supplier()
        if value:
            logger.debug(f"Resolved '{key}' from page content")
            meta_contents[key] = [value]
        else:
            logger.debug(f"No page content available for '{key}'")
