"""Module instance construction."""

import logging
from typing import Any, Mapping, Optional

from ..navigators.base import Navigator

logger = logging.getLogger(__name__)


def instantiate(
    module_cls: type,
    base: Navigator,
    parent: Any,
    params: Optional[Mapping[str, Any]] = None,
) -> Any:
    """
    Create a module bound permanently to an already resolved base.

    The module shares the document root and configuration of ``parent``.
    Its own content is resolved lazily on first access.

    Args:
        module_cls: Module subclass to instantiate
        base: Resolved base navigator
        parent: Page or module including the new module
        params: Module parameters, readable as attributes of the module

    Returns:
        New module instance
    """
    module = module_cls(
        base,
        params=params,
        root=parent.root,
        configuration=parent.configuration,
    )
    logger.debug(
        f"Instantiated {module_cls.__name__} in {type(parent).__name__}"
    )
    return module
