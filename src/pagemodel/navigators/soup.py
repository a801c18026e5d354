"""
BeautifulSoup-backed navigator.

Queries a parsed HTML document with CSS selectors. Useful for static
documents, offline fixtures and tests where no live browser is involved.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Union

from bs4 import BeautifulSoup, Tag

from .base import Navigator

logger = logging.getLogger(__name__)


class SoupNavigator(Navigator):
    """
    Navigator over a list of BeautifulSoup tags.

    Usage:
        root = SoupNavigator.from_html("<div id='cart'>...</div>")
        rows = root.find("#cart tr")
    """

    def __init__(self, elements: Iterable[Tag] = ()):
        self._elements: List[Tag] = list(elements)

    @classmethod
    def from_html(cls, html: str, parser: str = "html.parser") -> "SoupNavigator":
        """Parse ``html`` and return the document-root navigator."""
        return cls([BeautifulSoup(html, parser)])

    @property
    def elements(self) -> List[Tag]:
        return list(self._elements)

    def find(self, selector: str) -> "SoupNavigator":
        found: List[Tag] = []
        seen = set()
        for element in self._elements:
            for match in element.select(selector):
                if id(match) not in seen:
                    seen.add(id(match))
                    found.append(match)
        logger.debug(f"find({selector!r}) matched {len(found)} element(s)")
        return SoupNavigator(found)

    def filter(self, selector: str) -> "SoupNavigator":
        return SoupNavigator(
            el for el in self._elements if self._matches(el, selector)
        )

    def exclude(self, selector: str) -> "SoupNavigator":
        return SoupNavigator(
            el for el in self._elements if not self._matches(el, selector)
        )

    @staticmethod
    def _matches(element: Tag, selector: str) -> bool:
        if isinstance(element, BeautifulSoup):
            # The document object itself is not an element
            return False
        return element.css.match(selector)

    def __getitem__(self, index: Union[int, slice]) -> "SoupNavigator":
        if isinstance(index, slice):
            return SoupNavigator(self._elements[index])
        try:
            return SoupNavigator([self._elements[index]])
        except IndexError:
            return SoupNavigator()

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator["SoupNavigator"]:
        for element in self._elements:
            yield SoupNavigator([element])

    def text(self) -> Optional[str]:
        if not self._elements:
            return None
        return self._elements[0].get_text(strip=True)

    def attr(self, name: str) -> Optional[str]:
        if not self._elements:
            return None
        value = self._elements[0].get(name)
        if isinstance(value, list):
            # Multi-valued attributes such as class
            return " ".join(value)
        return value

    def __repr__(self) -> str:
        names = ", ".join(el.name or "?" for el in self._elements[:5])
        more = "..." if len(self._elements) > 5 else ""
        return f"SoupNavigator([{names}{more}])"
