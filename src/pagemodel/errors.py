"""
Exception hierarchy for page content resolution.

Every error raised while declaring or resolving content derives from
PageModelError, so callers can catch the whole family at once:
- ContentDefinitionError: problems detected when a class is created
- UnknownContentError: lookup of a name no class in the hierarchy declares
- RequiredContentNotPresent: required content matched nothing
- ContentCountError: matched element count outside declared bounds
- WaitTimeoutError: a waiting condition never became true
- ConfigurationLoadError: a configuration file could not be loaded
"""

from typing import Any, Optional


class PageModelError(Exception):
    """Base class for all pagemodel errors."""


class ContentDefinitionError(PageModelError):
    """Raised when content is declared in an ambiguous or invalid way."""


class UnknownContentError(PageModelError, AttributeError):
    """Raised when content is requested by a name that is not declared."""

    def __init__(self, name: str, owner: str):
        super().__init__(f"'{owner}' has no content named '{name}'")
        # AttributeError.__init__ resets name on Python 3.10+
        self.name = name
        self.owner = owner


class RequiredContentNotPresent(PageModelError):
    """Raised when required content resolved to nothing."""

    def __init__(self, name: str, owner: str):
        self.name = name
        self.owner = owner
        super().__init__(
            f"Required content '{name}' of '{owner}' is not present"
        )


class ContentCountError(PageModelError):
    """Raised when content matched fewer or more elements than allowed."""

    def __init__(
        self,
        name: str,
        owner: str,
        count: int,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
    ):
        self.name = name
        self.owner = owner
        self.count = count
        self.minimum = minimum
        self.maximum = maximum
        bounds = []
        if minimum is not None:
            bounds.append(f"at least {minimum}")
        if maximum is not None:
            bounds.append(f"at most {maximum}")
        super().__init__(
            f"Content '{name}' of '{owner}' matched {count} element(s), "
            f"expected {' and '.join(bounds)}"
        )


class WaitTimeoutError(PageModelError):
    """
    Raised when a waiting condition did not pass within its timeout.

    The last error raised by the polled block, if any, is chained as
    ``__cause__``.
    """

    def __init__(
        self,
        timeout: float,
        elapsed: float,
        last_value: Any = None,
        description: Optional[str] = None,
    ):
        self.timeout = timeout
        self.elapsed = elapsed
        self.last_value = last_value
        self.description = description
        subject = description or "condition"
        super().__init__(
            f"Timed out after {elapsed:.2f}s waiting for {subject} "
            f"(timeout {timeout}s, last value: {last_value!r})"
        )


class ConfigurationLoadError(PageModelError):
    """Raised when a configuration file exists but cannot be loaded."""

    def __init__(self, location: Any, environment: Optional[str]):
        self.location = location
        self.environment = environment
        super().__init__(
            f"Unable to load configuration @ '{location}' "
            f"(with environment: {environment})"
        )
