"""
Content templates.

A ContentTemplate is an immutable description of how to produce one named
piece of content: a factory callable plus declared options. Templates are
declared as class attributes with ``content(...)`` and act as descriptors,
so ``page.heading`` resolves the ``heading`` template of ``page``.
"""

import functools
import inspect
from types import MappingProxyType
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Union

from ..errors import ContentDefinitionError

if TYPE_CHECKING:
    from ..config import TemplateDefaults


Factory = Callable[..., Any]
BaseExpression = Union[str, Callable[..., Any]]


@dataclass(frozen=True)
class ContentOptions:
    """
    Declared options of a content template.

    ``cache``, ``required`` and ``wait`` left as None take their value from
    the configuration's template defaults at resolution time.
    """
    cache: Optional[bool] = None
    required: Optional[bool] = None
    wait: Any = None
    module: Optional[type] = None
    module_params: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )
    base: Optional[BaseExpression] = None
    each: bool = False
    min: Optional[int] = None
    max: Optional[int] = None

    def with_defaults(self, defaults: "TemplateDefaults") -> "ContentOptions":
        """Return options with unset values filled from ``defaults``."""
        return replace(
            self,
            cache=defaults.cache if self.cache is None else self.cache,
            required=defaults.required if self.required is None else self.required,
            wait=defaults.wait if self.wait is None else self.wait,
        )

    def validate(self, name: str) -> None:
        """Reject option combinations that cannot be resolved."""
        from ..module import Module

        if self.module is not None and not (
            isinstance(self.module, type) and issubclass(self.module, Module)
        ):
            raise ContentDefinitionError(
                f"Content '{name}': module must be a Module subclass, "
                f"got {self.module!r}"
            )
        if self.module_params and self.module is None:
            raise ContentDefinitionError(
                f"Content '{name}': module_params given without a module"
            )
        if self.base is not None and not (
            isinstance(self.base, str) or callable(self.base)
        ):
            raise ContentDefinitionError(
                f"Content '{name}': base must be a content name or a callable"
            )
        if self.base == name:
            raise ContentDefinitionError(
                f"Content '{name}' cannot be based on itself"
            )
        if isinstance(self.wait, bool) or self.wait is None:
            pass
        elif isinstance(self.wait, (int, float)):
            if self.wait <= 0:
                raise ContentDefinitionError(
                    f"Content '{name}': wait timeout must be positive"
                )
        elif isinstance(self.wait, tuple):
            if len(self.wait) != 2:
                raise ContentDefinitionError(
                    f"Content '{name}': wait must be (timeout, retry_interval)"
                )
        elif not isinstance(self.wait, str):
            raise ContentDefinitionError(
                f"Content '{name}': unsupported wait value {self.wait!r}"
            )
        for bound in (self.min, self.max):
            if bound is not None and bound < 0:
                raise ContentDefinitionError(
                    f"Content '{name}': min/max must not be negative"
                )
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ContentDefinitionError(
                f"Content '{name}': min ({self.min}) is greater than max ({self.max})"
            )


def _accepts_arguments(factory: Optional[Factory]) -> bool:
    """True when ``factory`` takes parameters beyond the content scope."""
    if factory is None:
        return False
    try:
        parameters = list(inspect.signature(factory).parameters.values())
    except (TypeError, ValueError):
        return False
    positional = [
        p for p in parameters
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    variadic = any(p.kind == p.VAR_POSITIONAL for p in parameters)
    return variadic or len(positional) > 1


@dataclass(frozen=True, eq=False)
class ContentTemplate:
    """
    Immutable, named specification of one content item.

    The name is assigned once, when the template is bound to a class
    attribute.
    """
    factory: Optional[Factory]
    options: ContentOptions
    name: Optional[str] = None
    takes_arguments: bool = False

    def __set_name__(self, owner: type, name: str) -> None:
        # Conflicting names are rejected by ContentMeta before this runs
        object.__setattr__(self, "name", name)

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        if self.takes_arguments:
            return functools.partial(instance.get_content, self.name)
        return instance.get_content(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"Content '{self.name}' cannot be assigned")


def content(
    factory: Optional[Factory] = None,
    *,
    cache: Optional[bool] = None,
    required: Optional[bool] = None,
    wait: Any = None,
    module: Optional[type] = None,
    module_params: Optional[Mapping[str, Any]] = None,
    base: Optional[BaseExpression] = None,
    each: bool = False,
    min: Optional[int] = None,
    max: Optional[int] = None,
) -> ContentTemplate:
    """
    Declare a content item on a Page or Module class.

    Args:
        factory: Called as ``factory(scope, *args)`` where ``scope`` queries
            relative to the template's base and exposes the owning instance's
            attributes. May be omitted when ``module`` is given.
        cache: Memoize the resolved value per owning instance
        required: Fail when the value is empty; otherwise return None
        wait: Poll until the value is non-empty: True, a timeout in seconds,
            a wait preset name or a ``(timeout, retry_interval)`` pair
        module: Module class to mount on the factory's result
        module_params: Parameters passed to every created module
        base: Name of another content item, or a callable over the owner's
            scope, that the factory is evaluated against
        each: Create one module (or single-element navigator) per element
            matched by the factory
        min: Minimum number of matched elements
        max: Maximum number of matched elements

    Example:
        class CartPage(Page):
            heading = content(lambda s: s.find("h1"))
            rows = content(lambda s: s.find("tr").exclude(".header"),
                           module=CartRow, each=True)
    """
    if factory is None and module is None:
        raise ContentDefinitionError("content() needs a factory or a module")
    if factory is not None and not callable(factory):
        raise ContentDefinitionError(f"Content factory {factory!r} is not callable")
    if each and factory is None:
        raise ContentDefinitionError(
            "content(each=True) needs a factory locating the repeated elements"
        )

    options = ContentOptions(
        cache=cache,
        required=required,
        wait=wait,
        module=module,
        module_params=MappingProxyType(dict(module_params or {})),
        base=base,
        each=each,
        min=min,
        max=max,
    )
    return ContentTemplate(
        factory=factory,
        options=options,
        takes_arguments=_accepts_arguments(factory),
    )
