"""
AWS SNS and SQS URL normalization.

Examples:
    "arn:aws:sns:us-east-2:123456789012:mytopic"
        -> "awssns:///arn:aws:sns:us-east-2:123456789012:mytopic?region=us-east-2"
    "https://sqs.us-east-2.amazonaws.com/123456789012/myqueue"
        -> "awssqs://https://sqs.us-east-2.amazonaws.com/123456789012/myqueue?region=us-east-2"
"""

import re

from ..core.backends import BackendKind
from ..core.errors import MissingFieldError
from ..core.locator import Locator, parse_locator
from .base import PUBSUB_REGISTRY, SNS_ARN_PREFIX, SQS_HTTPS_PREFIX, SQS_URL_PREFIX

# arn:aws:sns:<region>:<account>:<topic>
_ARN_REGION_INDEX = 3
# sqs.<region>.amazonaws.com
_HOST_REGION_INDEX = 1
_SQS_HOST = re.compile(r"^sqs\.(?P<region>[a-z0-9-]+)\.amazonaws\.com(:\d+)?$")


@PUBSUB_REGISTRY.register_decorator(BackendKind.SNS_LIKE)
def normalize_sns(src_url: str) -> str:
    if src_url.startswith(SNS_ARN_PREFIX):
        region = _region_from_arn(src_url, src_url)
        topic = Locator(scheme=BackendKind.SNS_LIKE.scheme, path="/" + src_url, query={"region": region})
        return topic.to_url()

    locator = parse_locator(src_url)
    if "region" in locator.query:
        return src_url
    region = _region_from_arn(locator.path.lstrip("/"), src_url)
    return locator.with_query(region=region).to_url()


@PUBSUB_REGISTRY.register_decorator(BackendKind.SQS_LIKE)
def normalize_sqs(src_url: str) -> str:
    wrapped = SQS_URL_PREFIX + "https://"
    if src_url.startswith(wrapped) or src_url.startswith(SQS_HTTPS_PREFIX):
        queue_url = src_url[len(SQS_URL_PREFIX) :] if src_url.startswith(wrapped) else src_url
        locator = parse_locator(queue_url)
        if "region" in locator.query:
            return SQS_URL_PREFIX + queue_url
        return SQS_URL_PREFIX + _with_host_region(locator, src_url).to_url()

    # awssqs://sqs.<region>.amazonaws.com/<account>/<queue>; other hosts pass through
    locator = parse_locator(src_url)
    match = _SQS_HOST.match(locator.authority)
    if match is None or "region" in locator.query:
        return src_url
    return locator.with_query(region=match.group("region")).to_url()


def _with_host_region(locator: Locator, src_url: str) -> Locator:
    labels = locator.authority.split(".")
    if len(labels) <= _HOST_REGION_INDEX or not labels[_HOST_REGION_INDEX]:
        raise MissingFieldError("SQS URL host doesn't have region information", src_url)
    return locator.with_query(region=labels[_HOST_REGION_INDEX])


def _region_from_arn(arn: str, src_url: str) -> str:
    fragments = arn.split(":")
    if len(fragments) <= _ARN_REGION_INDEX or not fragments[_ARN_REGION_INDEX]:
        raise MissingFieldError("SNS topic ARN doesn't have region information", src_url)
    return fragments[_ARN_REGION_INDEX]
