"""
Pages and modules.

Page and Module classes declare content with ``content(...)``. A Page is
rooted at the document; a Module is a reusable region mounted at a computed
base and is itself a Navigator, delegating navigator operations to that
base.

Example:
    class CartRow(Module):
        name = content(lambda s: s.find("td.name"))
        price = content(lambda s: s.find("td.price"))

    class CartPage(Page):
        rows = content(lambda s: s.find("table tr").exclude(".header"),
                       module=CartRow, each=True)

    page = CartPage(SoupNavigator.from_html(html))
    page.rows[1].price.text()
"""

import logging
from abc import ABCMeta
from typing import Any, Callable, ClassVar, Dict, Iterator, List, Mapping, Optional, Set, Union

from .config import Configuration
from .content.definitions import (
    DEFINITIONS_ATTRIBUTE,
    ClassBodyNamespace,
    ContentDefinitionSet,
    build_definitions,
)
from .content.engine import ContentResolutionEngine
from .content.factory import instantiate
from .content.template import ContentTemplate
from .errors import ContentDefinitionError
from .navigators.base import Navigator

logger = logging.getLogger(__name__)


class ContentMeta(ABCMeta):
    """Builds the content definition set of every class it creates."""

    @classmethod
    def __prepare__(mcls, name, bases, **kwargs):
        return ClassBodyNamespace(name)

    def __new__(mcls, name, bases, namespace, **kwargs):
        for key, value in namespace.items():
            if not isinstance(value, ContentTemplate):
                continue
            for base in bases:
                inherited = getattr(base, key, None)
                if inherited is not None and not isinstance(inherited, ContentTemplate):
                    raise ContentDefinitionError(
                        f"Content '{key}' of '{name}' hides attribute "
                        f"'{key}' of '{base.__name__}'"
                    )
        definitions = build_definitions(name, bases, namespace)
        cls = super().__new__(mcls, name, bases, dict(namespace), **kwargs)
        setattr(cls, DEFINITIONS_ATTRIBUTE, definitions)
        return cls


class PageContentSupport(metaclass=ContentMeta):
    """Content ownership shared by pages and modules."""

    _engine: ClassVar[ContentResolutionEngine] = ContentResolutionEngine()

    def __init__(
        self,
        navigator: Navigator,
        root: Optional[Navigator] = None,
        configuration: Optional[Configuration] = None,
    ):
        self._navigator = navigator
        self._root = root if root is not None else navigator
        self._configuration = configuration or Configuration()
        self._content_cache: Dict[str, Any] = {}
        self._resolving: Set[str] = set()

    @property
    def navigator(self) -> Navigator:
        """Base this instance's content is scoped to."""
        return self._navigator

    @property
    def root(self) -> Navigator:
        """Document root."""
        return self._root

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def content_definitions(self) -> ContentDefinitionSet:
        return getattr(type(self), DEFINITIONS_ATTRIBUTE)

    def get_content(self, name: str, *args: Any) -> Any:
        """Resolve content ``name``, passing ``args`` to its factory."""
        return self._engine.resolve(self, name, args)

    def has_content(self, name: str) -> bool:
        return name in self.content_definitions

    def invalidate(self, name: Optional[str] = None) -> None:
        """Forget the cached value of ``name``, or of all content."""
        if name is None:
            self._content_cache.clear()
        else:
            self._content_cache.pop(name, None)

    def find(self, selector: str) -> Navigator:
        return self._navigator.find(selector)

    def module(
        self,
        module_cls: type,
        base: Optional[Navigator] = None,
        **params: Any,
    ) -> "Module":
        """
        Mount a module.

        Args:
            module_cls: Module subclass
            base: Call-site context. The module's static base, if any, is
                looked up inside it. Defaults to the document root.
            **params: Module parameters

        Returns:
            Module bound to its resolved base
        """
        resolved = self._engine.resolver.module_base(module_cls, base, self.root)
        return instantiate(module_cls, resolved, self, params)

    def modules(
        self,
        module_cls: type,
        navigator: Navigator,
        **params: Any,
    ) -> List["Module"]:
        """Mount one module per element of ``navigator``, each with its ``index``."""
        return [
            self.module(module_cls, element, **dict({"index": index}, **params))
            for index, element in enumerate(navigator)
        ]


class Module(PageContentSupport, Navigator):
    """
    Reusable content region.

    A module class may declare ``static_base``, a selector or a callable
    taking a navigator, locating the module's own base within the context it
    is mounted at.
    """

    static_base: ClassVar[Union[None, str, Callable[[Navigator], Navigator]]] = None

    def __init__(
        self,
        navigator: Navigator,
        params: Optional[Mapping[str, Any]] = None,
        root: Optional[Navigator] = None,
        configuration: Optional[Configuration] = None,
    ):
        super().__init__(navigator, root=root, configuration=configuration)
        self._params = dict(params or {})
        for key, value in self._params.items():
            self._check_param(key)
            setattr(self, key, value)

    def _check_param(self, key: str) -> None:
        owner = type(self).__name__
        if key in self.content_definitions:
            raise ContentDefinitionError(
                f"Parameter '{key}' of '{owner}' clashes with content of the same name"
            )
        if key.startswith("_") or hasattr(Module, key):
            raise ContentDefinitionError(
                f"Parameter '{key}' of '{owner}' clashes with a module attribute"
            )

    @property
    def params(self) -> Dict[str, Any]:
        return dict(self._params)

    def filter(self, selector: str) -> Navigator:
        return self._navigator.filter(selector)

    def exclude(self, selector: str) -> Navigator:
        return self._navigator.exclude(selector)

    def __getitem__(self, index: Union[int, slice]) -> Navigator:
        return self._navigator[index]

    def __len__(self) -> int:
        return len(self._navigator)

    def __iter__(self) -> Iterator[Navigator]:
        return iter(self._navigator)

    def text(self) -> Optional[str]:
        return self._navigator.text()

    def attr(self, name: str) -> Optional[str]:
        return self._navigator.attr(name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._navigator!r})"


class Page(PageContentSupport):
    """Top-level content owner, scoped to the document root."""

    def __init__(self, root: Navigator, configuration: Optional[Configuration] = None):
        super().__init__(root, root=root, configuration=configuration)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._root!r})"
