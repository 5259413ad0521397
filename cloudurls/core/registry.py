"""
Handler registry keyed by backend kind.

Each normalizer keeps one registry and its handlers register themselves
at import time, so dispatch is a lookup rather than a chain of branches.
"""

from typing import Callable, Dict, Generic, List, Optional, TypeVar

from .backends import BackendKind
from .errors import UnrecognizedSchemeError

F = TypeVar("F", bound=Callable)


class HandlerRegistry(Generic[F]):
    """Registry mapping a BackendKind to its normalization handler.

    Example:
        DOCSTORE_REGISTRY = HandlerRegistry("docstore")

        @DOCSTORE_REGISTRY.register_decorator(BackendKind.WIDE_COLUMN)
        def normalize_dynamodb(locator, options):
            ...

        handler = DOCSTORE_REGISTRY.get(BackendKind.WIDE_COLUMN)
    """

    def __init__(self, name: str):
        """Initialize the registry.

        Args:
            name: Human-readable name for error messages (e.g., "docstore").
        """
        self._registry: Dict[BackendKind, F] = {}
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def register(self, kind: BackendKind, func: F) -> None:
        """Register a handler for the given backend kind.

        Raises:
            ValueError: If func is not callable or kind is already registered.
        """
        if not callable(func):
            raise ValueError(f"{self._name} handler must be callable, got {type(func)}")
        if kind in self._registry:
            raise ValueError(f"{self._name} handler for '{kind.scheme}' is already registered")
        self._registry[kind] = func

    def get(self, kind: BackendKind, url: Optional[str] = None) -> F:
        """Get the handler registered for a backend kind.

        Raises:
            UnrecognizedSchemeError: If no handler is registered for kind.
        """
        if kind not in self._registry:
            raise UnrecognizedSchemeError(kind.scheme, self._name, url, self.schemes())
        return self._registry[kind]

    def resolve(self, scheme: str, url: Optional[str] = None) -> F:
        """Get the handler for a raw scheme token."""
        return self.get(BackendKind.from_scheme(scheme, self._name, url, self.schemes()), url)

    def keys(self) -> List[BackendKind]:
        """Return all registered backend kinds."""
        return list(self._registry.keys())

    def schemes(self) -> List[str]:
        """Return the scheme tokens of all registered backend kinds."""
        return [kind.scheme for kind in self._registry]

    def register_decorator(self, kind: BackendKind) -> Callable[[F], F]:
        """Return a decorator that registers the handler under the given kind."""

        def decorator(func: F) -> F:
            self.register(kind, func)
            return func

        return decorator
