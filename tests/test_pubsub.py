"""Tests for pubsub URL normalization."""

import pytest

from cloudurls import MissingFieldError, StructuralMismatchError, normalize_pubsub_url
from cloudurls.core import BackendKind
from cloudurls.pubsub import PUBSUB_REGISTRY, classify_pubsub_url

SNS_ARN = "arn:aws:sns:us-east-2:123456789012:mytopic"
SQS_QUEUE = "https://sqs.us-east-2.amazonaws.com/123456789012/myqueue"


class TestNormalizePubSubURL:
    """Tests for normalize_pubsub_url."""

    @pytest.mark.parametrize(
        "src, expected",
        [
            (SNS_ARN, f"awssns:///{SNS_ARN}?region=us-east-2"),
            (f"awssns:///{SNS_ARN}", f"awssns:///{SNS_ARN}?region=us-east-2"),
            (SQS_QUEUE, f"awssqs://{SQS_QUEUE}?region=us-east-2"),
            (f"awssqs://{SQS_QUEUE}", f"awssqs://{SQS_QUEUE}?region=us-east-2"),
            ("gcppubsub://my-project/mytopic", "gcppubsub://projects/my-project/topics/mytopic"),
            (
                "gcppubsub://projects/my-project/topics/mytopic",
                "gcppubsub://projects/my-project/topics/mytopic",
            ),
        ],
    )
    def test_normalize(self, src, expected):
        """Known source forms normalize to their canonical URL."""
        assert normalize_pubsub_url(src) == expected

    @pytest.mark.parametrize("src", ["mem://topicA", "nats://subject", "kafka://group?topic=t", "not a url"])
    def test_unrecognised_passthrough(self, src):
        """URLs of unrecognised kinds come back unchanged."""
        assert normalize_pubsub_url(src) == src

    @pytest.mark.parametrize(
        "src",
        [
            SNS_ARN,
            SQS_QUEUE,
            "awssqs://sqs.us-east-2.amazonaws.com/123456789012/myqueue",
            "gcppubsub://my-project/mytopic",
        ],
    )
    def test_idempotent(self, src):
        """Normalizing a canonical URL returns it unchanged."""
        once = normalize_pubsub_url(src)
        assert normalize_pubsub_url(once) == once

    def test_registered_backends(self):
        """Exactly the three pubsub backends are registered."""
        assert set(PUBSUB_REGISTRY.keys()) == {
            BackendKind.SNS_LIKE,
            BackendKind.SQS_LIKE,
            BackendKind.PUBSUB_LIKE,
        }


class TestSNS:
    """Tests for SNS topic URLs."""

    def test_existing_region_kept(self):
        """A region already in the URL is not recomputed."""
        src = f"awssns:///{SNS_ARN}?region=eu-west-1"
        assert normalize_pubsub_url(src) == src

    def test_existing_region_keeps_source_bytes(self):
        """A topic URL that needs no change comes back byte for byte."""
        src = f"awssns:///{SNS_ARN}?region=eu-west-1&label=a%20b&raw"
        assert normalize_pubsub_url(src) == src

    @pytest.mark.parametrize("src", ["arn:aws:sns", "arn:aws:sns::123456789012:mytopic", "awssns:///arn:aws:sns"])
    def test_missing_region(self, src):
        """An ARN without a region field is an error."""
        with pytest.raises(MissingFieldError, match="region information"):
            normalize_pubsub_url(src)


class TestSQS:
    """Tests for SQS queue URLs."""

    def test_bare_awssqs_host(self):
        """awssqs://sqs.<region>... gets its region from the host."""
        src = "awssqs://sqs.us-east-2.amazonaws.com/123456789012/myqueue"
        assert normalize_pubsub_url(src) == src + "?region=us-east-2"

    def test_existing_region_kept(self):
        """A region already on the queue URL is not recomputed."""
        src = f"awssqs://{SQS_QUEUE}?region=eu-west-1"
        assert normalize_pubsub_url(src) == src

    def test_missing_region(self):
        """A wrapped https queue URL whose host has no region label is an error."""
        with pytest.raises(MissingFieldError, match="region information"):
            normalize_pubsub_url("awssqs://https://localhost/queue")

    @pytest.mark.parametrize(
        "src",
        [
            "awssqs://localhost/queue",
            "awssqs://127.0.0.1/queue",
            "awssqs://localhost:4566/000000000000/q",
            "awssqs://queue.internal.example.com/jobs",
        ],
    )
    def test_non_aws_host_passthrough(self, src):
        """Bare awssqs URLs for hosts other than sqs.<region>.amazonaws.com are left alone."""
        assert normalize_pubsub_url(src) == src

    def test_wrapped_queue_with_region_keeps_source_bytes(self):
        """A queue URL that already has a region is only wrapped."""
        src = "https://sqs.us-east-2.amazonaws.com/123456789012/my%2Dqueue?region=us-east-2&flag"
        assert normalize_pubsub_url(src) == "awssqs://" + src


class TestGCPPubSub:
    """Tests for gcppubsub URLs."""

    def test_missing_project(self):
        """gcppubsub:// without a project is an error."""
        with pytest.raises(MissingFieldError, match="project and topic"):
            normalize_pubsub_url("gcppubsub://")

    def test_empty_topic(self):
        """A shorthand URL with an empty topic is an error."""
        with pytest.raises(MissingFieldError, match="project and topic"):
            normalize_pubsub_url("gcppubsub://my-project/")

    @pytest.mark.parametrize(
        "src",
        [
            "gcppubsub://my-project",
            "gcppubsub://my-project/a/b",
            "gcppubsub://projects/my-project",
            "gcppubsub://projects/my-project/topics/mytopic/extra",
        ],
    )
    def test_wrong_shape(self, src):
        """Paths with unsupported segment counts are rejected."""
        with pytest.raises(StructuralMismatchError, match="gcppubsub URL should be"):
            normalize_pubsub_url(src)


class TestClassifyPubSubURL:
    """Tests for classify_pubsub_url."""

    @pytest.mark.parametrize(
        "src, expected",
        [
            (SNS_ARN, BackendKind.SNS_LIKE),
            (f"awssns:///{SNS_ARN}", BackendKind.SNS_LIKE),
            (SQS_QUEUE, BackendKind.SQS_LIKE),
            ("awssqs://sqs.us-east-2.amazonaws.com/1/q", BackendKind.SQS_LIKE),
            ("gcppubsub://p/t", BackendKind.PUBSUB_LIKE),
            ("https://example.com/queue", None),
            ("mem://topicA", None),
        ],
    )
    def test_classify(self, src, expected):
        """URLs are classified by prefix."""
        assert classify_pubsub_url(src) == expected
