"""
PubSub URL normalization entry point.

    sns_url = normalize_pubsub_url("arn:aws:sns:us-east-2:123456789012:mytopic")
    # "awssns:///arn:aws:sns:us-east-2:123456789012:mytopic?region=us-east-2"
"""

from .base import PUBSUB_REGISTRY, classify_pubsub_url


def normalize_pubsub_url(src_url: str) -> str:
    """Normalize a pubsub topic or subscription URL.

    SNS ARNs and SQS queue URLs gain the awssns/awssqs scheme and a region
    query; shorthand gcppubsub URLs are expanded to the projects/topics form.
    URLs of any other kind are returned unchanged.

    Raises:
        MalformedLocatorError: If a recognised URL cannot be parsed.
        MissingFieldError: If the region, project or topic cannot be found.
        StructuralMismatchError: If a gcppubsub path has an unsupported shape.
    """
    kind = classify_pubsub_url(src_url)
    if kind is None:
        return src_url
    return PUBSUB_REGISTRY.get(kind, src_url)(src_url)


# Import handlers to trigger self-registration via decorators
from . import aws, gcp  # noqa: E402, F401
