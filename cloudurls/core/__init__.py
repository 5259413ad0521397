"""Core building blocks shared by all normalizers."""

from .backends import BackendKind
from .environment import environ_snapshot
from .errors import (
    LocatorError,
    MalformedLocatorError,
    MissingFieldError,
    StructuralMismatchError,
    UnrecognizedSchemeError,
    UnsupportedKeyTypeError,
)
from .locator import Locator, join_path, parse_locator
from .registry import HandlerRegistry
from .validation import ConfigValidationError, deep_merge, get_defaults, load_config, process_config

__all__ = [
    "BackendKind",
    "ConfigValidationError",
    "HandlerRegistry",
    "Locator",
    "LocatorError",
    "MalformedLocatorError",
    "MissingFieldError",
    "StructuralMismatchError",
    "UnrecognizedSchemeError",
    "UnsupportedKeyTypeError",
    "deep_merge",
    "environ_snapshot",
    "get_defaults",
    "join_path",
    "load_config",
    "parse_locator",
    "process_config",
]
