"""
Base/context resolution.

Decides which navigator a template or module is scoped to. Three sources
compete, highest priority first:

1. the template's explicit ``base`` expression
2. the module class's ``static_base``, evaluated inside the call-site
   context (or the document root when there is none)
3. the call-site context, or the document root when there is none

A module's static base never replaces the call-site context, it is always
a query evaluated within it.
"""

import logging
from typing import Any, Optional

from ..navigators.base import Navigator
from .scope import ContentScope
from .template import BaseExpression, ContentTemplate

logger = logging.getLogger(__name__)


class BaseResolver:
    """Computes effective bases for content templates and modules."""

    def evaluate(self, expression: BaseExpression, owner: Any) -> Navigator:
        """
        Evaluate a ``base`` expression against ``owner``.

        Args:
            expression: Name of another content item of ``owner`` or a
                callable taking a scope over ``owner``
            owner: Page or module the template belongs to
        """
        if isinstance(expression, str):
            return owner.get_content(expression)
        return expression(ContentScope(owner, owner.navigator))

    def template_base(self, template: ContentTemplate, owner: Any) -> Navigator:
        """Navigator the template's factory is evaluated against."""
        if template.options.base is None:
            return owner.navigator
        return self.evaluate(template.options.base, owner)

    def module_base(
        self,
        module_cls: type,
        context: Optional[Navigator],
        root: Navigator,
    ) -> Navigator:
        """
        Base of a module of ``module_cls`` mounted at ``context``.

        Args:
            module_cls: Module class, possibly declaring ``static_base``
            context: Call-site context, or None
            root: Document root used when no context was supplied
        """
        relative = context if context is not None else root
        static_base = getattr(module_cls, "static_base", None)
        if static_base is None:
            return relative
        if isinstance(static_base, str):
            base = relative.find(static_base)
        else:
            base = static_base(relative)
        logger.debug(
            f"Resolved static base of {module_cls.__name__}: {base!r}"
        )
        return base

    def resolve(
        self,
        template: ContentTemplate,
        owner: Any,
        context: Optional[Navigator] = None,
    ) -> Navigator:
        """
        Base of the module mounted by ``template``.

        An explicit ``base`` on a template without a factory is used as is.
        Otherwise the module's own base is composed within ``context``.
        """
        options = template.options
        if options.base is not None and template.factory is None:
            return self.evaluate(options.base, owner)
        return self.module_base(options.module, context, owner.root)
