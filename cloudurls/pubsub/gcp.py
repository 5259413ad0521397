"""GCP Pub/Sub: gcppubsub://projects/<project>/topics/<topic>."""

from dataclasses import replace

from ..core.backends import BackendKind
from ..core.errors import MissingFieldError, StructuralMismatchError
from ..core.locator import join_path, parse_locator
from .base import PUBSUB_REGISTRY

PROJECTS = "projects"
_SHAPE_MESSAGE = (
    "gcppubsub URL should be gcppubsub://(project)/(topic) or "
    "gcppubsub://projects/(project)/topics/(topic)"
)


@PUBSUB_REGISTRY.register_decorator(BackendKind.PUBSUB_LIKE)
def normalize_gcp_pubsub(src_url: str) -> str:
    locator = parse_locator(src_url)
    elements = locator.segments

    if not locator.authority:
        raise MissingFieldError("gcppubsub URL should have project and topic names", src_url)
    if locator.authority == PROJECTS:
        if len(elements) != 4:
            raise StructuralMismatchError(_SHAPE_MESSAGE, src_url)
        return src_url

    if len(elements) != 2:
        raise StructuralMismatchError(_SHAPE_MESSAGE, src_url)
    if not elements[1]:
        raise MissingFieldError("gcppubsub URL should have project and topic names", src_url)
    canonical = replace(locator, authority=PROJECTS, path=join_path(locator.authority, "topics", elements[1]))
    return canonical.to_url()
