"""
Shared pieces of the pubsub normalizers: prefix classification and the
handler registry.
"""

from typing import Callable, Optional

from ..core.backends import BackendKind
from ..core.registry import HandlerRegistry

SNS_ARN_PREFIX = "arn:aws:sns"
SNS_URL_PREFIX = "awssns:///"
SQS_URL_PREFIX = "awssqs://"
SQS_HTTPS_PREFIX = "https://sqs."
GCP_PUBSUB_PREFIX = "gcppubsub://"

PubSubHandler = Callable[[str], str]

# Handlers register themselves via decorator when their module is imported
PUBSUB_REGISTRY: HandlerRegistry[PubSubHandler] = HandlerRegistry("pubsub")


def classify_pubsub_url(src_url: str) -> Optional[BackendKind]:
    """Return the backend a pubsub URL targets, or None if it is not recognised."""
    if src_url.startswith(SNS_ARN_PREFIX) or src_url.startswith(SNS_URL_PREFIX):
        return BackendKind.SNS_LIKE
    if src_url.startswith(SQS_URL_PREFIX) or src_url.startswith(SQS_HTTPS_PREFIX):
        return BackendKind.SQS_LIKE
    if src_url.startswith(GCP_PUBSUB_PREFIX):
        return BackendKind.PUBSUB_LIKE
    return None
