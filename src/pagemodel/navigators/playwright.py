"""
Playwright-backed navigator.

Wraps a Playwright sync ``Locator`` so page and module content can be
declared against a live browser page. Locators are lazy, so queries are only
sent to the browser when elements are counted, read or iterated.
"""

import logging
from typing import Iterator, Optional, Union

from playwright.sync_api import Locator, Page

from .base import Navigator

logger = logging.getLogger(__name__)


class LocatorNavigator(Navigator):
    """
    Navigator over a Playwright locator.

    Usage:
        with sync_playwright() as p:
            page = p.chromium.launch().new_page()
            page.goto("https://example.com")
            root = LocatorNavigator.for_page(page)
    """

    def __init__(self, locator: Locator):
        self._locator = locator

    @classmethod
    def for_page(cls, page: Page) -> "LocatorNavigator":
        """Return the document-root navigator for ``page``."""
        return cls(page.locator(":root"))

    @property
    def locator(self) -> Locator:
        return self._locator

    def find(self, selector: str) -> "LocatorNavigator":
        return LocatorNavigator(self._locator.locator(selector))

    def filter(self, selector: str) -> "LocatorNavigator":
        return LocatorNavigator(
            self._locator.and_(self._locator.page.locator(selector))
        )

    def exclude(self, selector: str) -> "LocatorNavigator":
        return LocatorNavigator(
            self._locator.and_(self._locator.page.locator(f":not({selector})"))
        )

    def __getitem__(self, index: Union[int, slice]) -> "LocatorNavigator":
        count = self._locator.count()
        if isinstance(index, slice):
            positions = range(count)[index]
            return _LocatorList([self._locator.nth(i) for i in positions])
        if index < 0:
            index += count
        if not 0 <= index < count:
            return _LocatorList([])
        return LocatorNavigator(self._locator.nth(index))

    def __len__(self) -> int:
        return self._locator.count()

    def __iter__(self) -> Iterator["LocatorNavigator"]:
        count = self._locator.count()
        logger.debug(f"Iterating {count} located element(s)")
        for i in range(count):
            yield LocatorNavigator(self._locator.nth(i))

    def text(self) -> Optional[str]:
        if self._locator.count() == 0:
            return None
        value = self._locator.first.text_content()
        return value.strip() if value is not None else None

    def attr(self, name: str) -> Optional[str]:
        if self._locator.count() == 0:
            return None
        return self._locator.first.get_attribute(name)

    def __repr__(self) -> str:
        return f"LocatorNavigator({self._locator!r})"


class _LocatorList(Navigator):
    """Fixed list of single-element locators, produced by slicing."""

    def __init__(self, locators):
        self._navigators = [LocatorNavigator(loc) for loc in locators]

    def find(self, selector: str) -> Navigator:
        return _LocatorList(
            nav.locator.locator(selector).nth(i)
            for nav in self._navigators
            for i in range(nav.locator.locator(selector).count())
        )

    def filter(self, selector: str) -> Navigator:
        return _LocatorList(
            nav.locator for nav in self._navigators if nav.filter(selector)
        )

    def exclude(self, selector: str) -> Navigator:
        return _LocatorList(
            nav.locator for nav in self._navigators if not nav.filter(selector)
        )

    def __getitem__(self, index: Union[int, slice]) -> Navigator:
        if isinstance(index, slice):
            return _LocatorList(nav.locator for nav in self._navigators[index])
        try:
            return self._navigators[index]
        except IndexError:
            return _LocatorList([])

    def __len__(self) -> int:
        return len(self._navigators)

    def __iter__(self) -> Iterator[Navigator]:
        return iter(self._navigators)

    def text(self) -> Optional[str]:
        return self._navigators[0].text() if self._navigators else None

    def attr(self, name: str) -> Optional[str]:
        return self._navigators[0].attr(name) if self._navigators else None
