"""
Navigator implementations.

Provides the abstract Navigator capability plus adapters for:
- BeautifulSoup-parsed static documents
- Playwright locators on live pages
"""

from .base import Navigator
from .soup import SoupNavigator
from .playwright import LocatorNavigator

__all__ = [
    "Navigator",
    "SoupNavigator",
    "LocatorNavigator",
]
