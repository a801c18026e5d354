"""
Per-class content definition sets.

Each Page or Module class carries one ContentDefinitionSet, built once when
the class is created and never modified afterwards. A class's own templates
replace inherited templates of the same name entirely; there is no merging
of individual options.
"""

import logging
from typing import Dict, Iterable, Iterator, Mapping, Set

from ..errors import ContentDefinitionError, UnknownContentError
from .template import ContentTemplate

logger = logging.getLogger(__name__)

DEFINITIONS_ATTRIBUTE = "_content_definitions"


class ContentDefinitionSet(Mapping[str, ContentTemplate]):
    """Ordered, read-only mapping of content name to template for one class."""

    def __init__(self, owner: str, templates: Mapping[str, ContentTemplate]):
        self.owner = owner
        self._templates: Dict[str, ContentTemplate] = dict(templates)

    @classmethod
    def merge(
        cls,
        owner: str,
        own: Mapping[str, ContentTemplate],
        ancestors: Iterable["ContentDefinitionSet"],
        shadowed: Iterable[str] = (),
    ) -> "ContentDefinitionSet":
        """
        Build the definition set of a class.

        Args:
            owner: Class name, used in error messages
            own: Templates declared in the class body
            ancestors: Definition sets of the direct bases, in MRO order
            shadowed: Non-content attributes of the class body, which hide
                inherited templates of the same name

        Returns:
            New definition set where ``own`` wins over ``ancestors`` and
            earlier ancestors win over later ones
        """
        merged: Dict[str, ContentTemplate] = {}
        for ancestor in reversed(list(ancestors)):
            merged.update(ancestor._templates)
        for name in shadowed:
            merged.pop(name, None)
        merged.update(own)
        return cls(owner, merged)

    def template_for(self, name: str) -> ContentTemplate:
        try:
            return self._templates[name]
        except KeyError:
            raise UnknownContentError(name, self.owner) from None

    def __getitem__(self, name: str) -> ContentTemplate:
        return self._templates[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        return f"ContentDefinitionSet({self.owner}: {list(self._templates)})"


class ClassBodyNamespace(dict):
    """Class body namespace that refuses a second template for one name."""

    def __init__(self, class_name: str):
        super().__init__()
        self.class_name = class_name

    def __setitem__(self, key: str, value) -> None:
        if isinstance(value, ContentTemplate) and isinstance(self.get(key), ContentTemplate):
            raise ContentDefinitionError(
                f"Content '{key}' is declared more than once in '{self.class_name}'"
            )
        super().__setitem__(key, value)


def _own_templates(class_name: str, namespace: Mapping) -> Dict[str, ContentTemplate]:
    own: Dict[str, ContentTemplate] = {}
    seen: Dict[int, str] = {}
    for key, value in namespace.items():
        if not isinstance(value, ContentTemplate):
            continue
        if id(value) in seen or (value.name is not None and value.name != key):
            other = seen.get(id(value), value.name)
            raise ContentDefinitionError(
                f"Content '{key}' of '{class_name}' is the same template "
                f"as '{other}'"
            )
        seen[id(value)] = key
        value.options.validate(key)
        own[key] = value
    return own


def build_definitions(
    class_name: str,
    bases: Iterable[type],
    namespace: Mapping,
) -> ContentDefinitionSet:
    """Validate a class body and merge its templates over its bases' sets."""
    own = _own_templates(class_name, namespace)
    shadowed: Set[str] = {
        key for key, value in namespace.items()
        if not isinstance(value, ContentTemplate) and not key.startswith("__")
    }
    ancestors = [
        getattr(base, DEFINITIONS_ATTRIBUTE)
        for base in bases
        if isinstance(getattr(base, DEFINITIONS_ATTRIBUTE, None), ContentDefinitionSet)
    ]
    definitions = ContentDefinitionSet.merge(class_name, own, ancestors, shadowed)
    logger.debug(f"Built {definitions!r}")
    return definitions


def content_definitions(cls: type) -> ContentDefinitionSet:
    """Return the definition set built for ``cls``."""
    definitions = cls.__dict__.get(DEFINITIONS_ATTRIBUTE)
    if definitions is None:
        raise TypeError(f"{cls.__name__} does not declare content")
    return definitions
