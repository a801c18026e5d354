"""
Navigator capability.

A Navigator is a handle onto zero or more located document elements. It can
be filtered, indexed and iterated, and it serves as the scoping context for
further queries rooted at its elements. Raw query results and modules both
satisfy this capability.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Union


class Navigator(ABC):
    """Abstract queryable handle over document elements."""

    @abstractmethod
    def find(self, selector: str) -> "Navigator":
        """Query descendants of every element matching ``selector``."""

    @abstractmethod
    def filter(self, selector: str) -> "Navigator":
        """Keep only the elements that themselves match ``selector``."""

    @abstractmethod
    def exclude(self, selector: str) -> "Navigator":
        """Drop the elements that match ``selector``."""

    @abstractmethod
    def __getitem__(self, index: Union[int, slice]) -> "Navigator":
        """
        Select elements by position.

        An out-of-range index yields an empty navigator instead of raising.
        """

    @abstractmethod
    def __len__(self) -> int:
        """Number of matched elements."""

    @abstractmethod
    def __iter__(self) -> Iterator["Navigator"]:
        """Yield one single-element navigator per matched element."""

    @abstractmethod
    def text(self) -> Optional[str]:
        """Text of the first matched element, None when empty."""

    @abstractmethod
    def attr(self, name: str) -> Optional[str]:
        """Attribute value of the first matched element."""

    def at(self, index: int) -> "Navigator":
        return self[index]

    def first(self) -> "Navigator":
        return self[0]

    def last(self) -> "Navigator":
        return self[-1]

    def is_empty(self) -> bool:
        return len(self) == 0

    def texts(self) -> List[str]:
        """Text of every matched element."""
        return [nav.text() or "" for nav in self]

    def __bool__(self) -> bool:
        return len(self) > 0
