"""HTML document abstraction used by the metadata extractor"""

import logging
from typing import List, Optional, Union
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag


logger = logging.getLogger(__name__)


class HTMLDocument:
    """Encapsulates a parsed HTML page and the queries the extractor needs"""

    def __init__(self, markup: Union[str, bytes], url: Optional[str] = None, encoding: Optional[str] = None):
        """
        Parse an HTML page

        Args:
            markup: HTML content, either decoded text or raw bytes
            url: URL the page was served from, used to resolve relative links
            encoding: Charset announced by the transport, used only for raw bytes
        """
        if isinstance(markup, bytes):
            self.soup = BeautifulSoup(markup, "lxml", from_encoding=encoding)
        else:
            self.soup = BeautifulSoup(markup, "lxml")
        self.url = url or ""
        self.base_url = self._resolve_base_url()

    def _resolve_base_url(self) -> str:
        """The page URL, overridden by a <base href> element when one is declared"""
        base_tag = self.soup.find("base", href=True)
        if base_tag is not None:
            href = self.attr(base_tag, "href").strip()
            if href:
                try:
                    return urljoin(self.url, href) if self.url else urlparse(href).geturl()
                except ValueError:
                    logger.debug(f"Ignoring malformed <base href>: {href}")
        return self.url

    @staticmethod
    def attr(element: Tag, name: str) -> Optional[str]:
        """Attribute value as a string, or None when the element does not carry it"""
        value = element.get(name)
        if value is None:
            return None
        # bs4 hands back multi-valued attributes such as rel as lists
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def find_all(self, tag: str) -> List[Tag]:
        """All elements with the given tag name, in document order"""
        return self.soup.find_all(tag)

    def select(self, selector: str) -> List[Tag]:
        """All elements matching a CSS selector, in document order"""
        return self.soup.select(selector)

    def first_attr(self, selector: str, name: str) -> str:
        """
        Value of ``name`` on the first element matching ``selector`` that carries it

        Returns an empty string when no matching element has the attribute.
        """
        for element in self.select(selector):
            value = self.attr(element, name)
            if value is not None:
                return value
        return ""

    def abs_url(self, element: Tag, name: str) -> str:
        """
        Resolve an URL attribute against the document base URL

        Returns an empty string when the attribute is missing, malformed or cannot be made absolute.
        """
        value = self.attr(element, name)
        if value is None:
            return ""
        value = value.strip()
        if not value:
            return ""
        try:
            if self.base_url:
                return urljoin(self.base_url, value)
            if urlparse(value).scheme:
                return value
        except ValueError:
            logger.debug(f"Ignoring malformed URL in {name} attribute: {value}")
        return ""

    def title(self) -> str:
        """Whitespace-normalized text of the first <title> element, empty if there is none"""
        title_tag = self.soup.find("title")
        if title_tag is None:
            return ""
        return " ".join(title_tag.get_text().split())
