"""
Content resolution engine.

Turns a content name requested on a page or module into a value:

1. return the cached value when caching applies
2. evaluate the template's factory against its base
3. mount a module on the result, or one module per element for
   repeating content
4. optionally poll steps 2-3 until the result is non-empty
5. check presence and element count
6. cache and return

The engine keeps no state of its own; caches live on the owning instances.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from ..errors import (
    ContentCountError,
    ContentDefinitionError,
    RequiredContentNotPresent,
)
from ..navigators.base import Navigator
from .factory import instantiate
from .resolver import BaseResolver
from .scope import ContentScope
from .template import ContentOptions, ContentTemplate

logger = logging.getLogger(__name__)


def _size(value: Any) -> Optional[int]:
    if isinstance(value, (Navigator, list, tuple)):
        return len(value)
    return None


def _is_empty(value: Any) -> bool:
    return value is None or _size(value) == 0


class ContentResolutionEngine:
    """Resolves named content for pages and modules."""

    def __init__(self, resolver: Optional[BaseResolver] = None):
        self.resolver = resolver or BaseResolver()

    def resolve(self, owner: Any, name: str, args: Tuple[Any, ...] = ()) -> Any:
        """
        Resolve content ``name`` of ``owner``.

        Only calls without arguments are cached; content requested with
        arguments is re-resolved on every call.

        Args:
            owner: Page or module instance
            name: Content name
            args: Call arguments passed to the factory after the scope

        Returns:
            Navigator, module, list of modules or navigators, any other
            factory value, or None for absent optional content

        Raises:
            UnknownContentError: If ``owner`` declares no such content
            RequiredContentNotPresent: If required content is empty
            ContentCountError: If min/max bounds are violated
            WaitTimeoutError: If waited-for content never appeared
        """
        owner_name = type(owner).__name__
        template = owner.content_definitions.template_for(name)
        options = template.options.with_defaults(owner.configuration.template_options)

        cacheable = options.cache and not args
        cache = owner._content_cache
        if cacheable and name in cache:
            logger.debug(f"Cache hit for '{name}' of {owner_name}")
            return cache[name]

        if name in owner._resolving:
            raise ContentDefinitionError(
                f"Content '{name}' of '{owner_name}' depends on itself"
            )
        owner._resolving.add(name)
        try:
            value = self._produce_or_wait(owner, template, options, args)
        finally:
            owner._resolving.discard(name)

        value = self._check(owner_name, name, options, value)
        if cacheable:
            cache[name] = value
        return value

    def _produce_or_wait(
        self,
        owner: Any,
        template: ContentTemplate,
        options: ContentOptions,
        args: Sequence[Any],
    ) -> Any:
        owner_name = type(owner).__name__
        try:
            waiting = owner.configuration.wait_for(options.wait)
        except ContentDefinitionError as e:
            raise ContentDefinitionError(
                f"Content '{template.name}' of '{owner_name}': {e}"
            ) from e

        if waiting is None:
            return self._produce(owner, template, options, args)

        logger.debug(
            f"Waiting up to {waiting.timeout}s for '{template.name}' of {owner_name}"
        )
        return waiting.wait_for(
            lambda: self._produce(owner, template, options, args),
            description=f"content '{template.name}' of '{owner_name}'",
            until=lambda value: not _is_empty(value),
        )

    def _produce(
        self,
        owner: Any,
        template: ContentTemplate,
        options: ContentOptions,
        args: Sequence[Any],
    ) -> Any:
        logger.debug(f"Resolving '{template.name}' of {type(owner).__name__}")
        scope_base = self.resolver.template_base(template, owner)
        if scope_base is None:
            # Optional base content is absent
            return None
        value = None
        if template.factory is not None:
            value = template.factory(ContentScope(owner, scope_base), *args)

        if options.each:
            return self._produce_each(owner, options, value)
        if options.module is None:
            return value

        context = value if template.factory is not None else None
        base = self.resolver.resolve(template, owner, context)
        return instantiate(options.module, base, owner, options.module_params)

    def _produce_each(self, owner: Any, options: ContentOptions, value: Any) -> List[Any]:
        elements = list(value) if value is not None else []
        if options.module is None:
            return elements

        # Every element gets its own base and its own module instance
        modules = []
        for index, element in enumerate(elements):
            params = {"index": index}
            params.update(options.module_params)
            base = self.resolver.module_base(options.module, element, owner.root)
            modules.append(instantiate(options.module, base, owner, params))
        return modules

    def _check(self, owner_name: str, name: str, options: ContentOptions, value: Any) -> Any:
        if _is_empty(value):
            if options.required:
                raise RequiredContentNotPresent(name, owner_name)
            logger.debug(f"Optional content '{name}' of {owner_name} is absent")
            return None

        size = _size(value)
        if size is not None:
            too_few = options.min is not None and size < options.min
            too_many = options.max is not None and size > options.max
            if too_few or too_many:
                raise ContentCountError(name, owner_name, size, options.min, options.max)
        return value
