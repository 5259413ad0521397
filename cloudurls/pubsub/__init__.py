"""PubSub URL normalization for AWS SNS/SQS and GCP Pub/Sub."""

from .base import PUBSUB_REGISTRY, classify_pubsub_url
from .normalizer import normalize_pubsub_url

__all__ = ["PUBSUB_REGISTRY", "classify_pubsub_url", "normalize_pubsub_url"]
