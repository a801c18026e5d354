"""Evaluation scope handed to content factories."""

from typing import Any

from ..navigators.base import Navigator


class ContentScope:
    """
    What a content factory sees.

    Queries run relative to the template's base; any other attribute is
    looked up on the owning page or module, so factories can refer to
    sibling content, module parameters and helpers:

        total = content(lambda s: s.find(".total"), base="summary")
        cell = content(lambda s, col: s.find("td")[col])
        label = content(lambda s: s.find("td")[s.index])
    """

    __slots__ = ("owner", "navigator")

    def __init__(self, owner: Any, navigator: Navigator):
        self.owner = owner
        self.navigator = navigator

    def find(self, selector: str) -> Navigator:
        return self.navigator.find(selector)

    def __getattr__(self, name: str) -> Any:
        return getattr(self.owner, name)

    def __repr__(self) -> str:
        return f"ContentScope({type(self.owner).__name__}, {self.navigator!r})"
