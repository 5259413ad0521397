"""
Closed set of backend kinds and the scheme tokens that select them.
"""

from enum import Enum
from typing import List, Optional

from .errors import UnrecognizedSchemeError


class BackendKind(str, Enum):
    """Backend selected by a URL scheme token. Not user-extensible."""

    IN_MEMORY_KV = "mem"
    OBJECT_STORAGE = "s3"
    DOCUMENT_DB_HIERARCHICAL = "firestore"
    WIDE_COLUMN = "dynamodb"
    DOCUMENT_DB_FLAT = "mongo"
    SNS_LIKE = "awssns"
    SQS_LIKE = "awssqs"
    PUBSUB_LIKE = "gcppubsub"

    @property
    def scheme(self) -> str:
        return self.value

    @classmethod
    def from_scheme(
        cls,
        scheme: str,
        kind: str = "backend",
        url: Optional[str] = None,
        available: Optional[List[str]] = None,
    ) -> "BackendKind":
        """Look up the backend for a scheme token.

        Args:
            scheme: Scheme token, e.g. "dynamodb".
            kind: Human-readable normalizer name for the error message.
            url: Offending URL for the error message.
            available: Schemes the caller accepts, listed in the error message.

        Raises:
            UnrecognizedSchemeError: If the scheme selects no backend.
        """
        try:
            return cls(scheme)
        except ValueError:
            raise UnrecognizedSchemeError(scheme, kind, url, available) from None
