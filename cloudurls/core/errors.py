"""
Error taxonomy for URL normalization.

Every normalizer either returns a canonical URL or raises one of these.
Nothing is partially rewritten before an error is raised.
"""

from typing import List, Optional


class LocatorError(ValueError):
    """Base class for all URL normalization errors."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        context = f": '{url}'" if url is not None else ""
        super().__init__(f"{message}{context}")


class MalformedLocatorError(LocatorError):
    """Raised when a URL string cannot be parsed at all."""


class MissingFieldError(LocatorError):
    """Raised when required information is absent and cannot be defaulted."""


class UnrecognizedSchemeError(LocatorError):
    """Raised when a scheme is not in the closed set a normalizer handles."""

    def __init__(self, scheme: str, kind: str, url: Optional[str] = None, available: Optional[List[str]] = None):
        self.scheme = scheme
        listing = f". Available: {available}" if available is not None else ""
        super().__init__(f"Unknown scheme of {kind}: '{scheme}'{listing}", url)


class StructuralMismatchError(LocatorError):
    """Raised when a path does not match any accepted shape for its backend."""


class UnsupportedKeyTypeError(LocatorError):
    """Raised when a key field has a value kind the table cannot index."""
