"""Declarative page content and module composition."""

__version__ = "0.1.0"

from pagemodel.content import (
    ContentDefinitionSet,
    ContentOptions,
    ContentScope,
    ContentTemplate,
    content,
    content_definitions,
)
from pagemodel.module import Module, Page
from pagemodel.navigators import LocatorNavigator, Navigator, SoupNavigator
from pagemodel.waiting import Wait
from pagemodel.config import (
    Configuration,
    ConfigurationLoader,
    TemplateDefaults,
    WaitSettings,
)
from pagemodel.errors import (
    PageModelError,
    ContentDefinitionError,
    UnknownContentError,
    RequiredContentNotPresent,
    ContentCountError,
    WaitTimeoutError,
    ConfigurationLoadError,
)
from pagemodel.logging_config import setup_logging, get_logger

__all__ = [
    # Declaration
    "content",
    "Page",
    "Module",
    "ContentTemplate",
    "ContentOptions",
    "ContentDefinitionSet",
    "ContentScope",
    "content_definitions",
    # Navigators
    "Navigator",
    "SoupNavigator",
    "LocatorNavigator",
    # Waiting and configuration
    "Wait",
    "Configuration",
    "ConfigurationLoader",
    "TemplateDefaults",
    "WaitSettings",
    # Errors
    "PageModelError",
    "ContentDefinitionError",
    "UnknownContentError",
    "RequiredContentNotPresent",
    "ContentCountError",
    "WaitTimeoutError",
    "ConfigurationLoadError",
    # Logging
    "setup_logging",
    "get_logger",
]
