"""
Content definition package.

Provides the declaration surface and the machinery behind it:
- content templates and their options
- per-class definition sets with subclass precedence
- base/context resolution for templates and modules
- the resolution engine with caching, waiting and repeating content
"""

from .template import ContentOptions, ContentTemplate, content
from .definitions import (
    ClassBodyNamespace,
    ContentDefinitionSet,
    build_definitions,
    content_definitions,
)
from .scope import ContentScope
from .resolver import BaseResolver
from .factory import instantiate
from .engine import ContentResolutionEngine

__all__ = [
    "ContentOptions",
    "ContentTemplate",
    "content",
    "ClassBodyNamespace",
    "ContentDefinitionSet",
    "build_definitions",
    "content_definitions",
    "ContentScope",
    "BaseResolver",
    "instantiate",
    "ContentResolutionEngine",
]
