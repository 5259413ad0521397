"""
Resolve the named resources of a configuration into canonical URLs.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .blob import normalize_blob_url
from .core import LocatorError, environ_snapshot, load_config
from .docstore import NormalizationOptions, normalize_docstore_url
from .pubsub import normalize_pubsub_url

logger = logging.getLogger(__name__)


def resolve_resources(
    source: str | Path | Dict[str, Any] | None = None,
    environ: Optional[Sequence[str]] = None,
) -> Dict[str, str]:
    """Normalize every resource declared in a configuration.

    Args:
        source: YAML/JSON config path, pre-parsed dict, or None (no resources).
        environ: KEY=VALUE strings used for blob region lookup. Defaults to a
            snapshot of the process environment. Entries from the config's
            ENVIRONMENT section take precedence.

    Returns:
        Mapping of resource name to canonical URL, in declaration order.

    Raises:
        ConfigValidationError: If the configuration is invalid.
        LocatorError: If a resource URL can't be normalized; the failing
            resource is logged at ERROR level first.
    """
    config = load_config(source)
    env = _effective_environ(config, environ)

    resolved = {}
    for name, resource in config["RESOURCES"].items():
        resolved[name] = resolve_resource(name, resource, env)
    return resolved


def resolve_resource(name: str, resource: Dict[str, Any], environ: Sequence[str]) -> str:
    """Normalize a single validated resource definition."""
    resource_type = resource["type"]
    url = resource["url"]
    try:
        if resource_type == "blob":
            canonical = normalize_blob_url(url, environ)
        elif resource_type == "docstore":
            options = NormalizationOptions.from_dict(resource.get("OPTIONS"))
            canonical = normalize_docstore_url(url, options)
        else:
            canonical = normalize_pubsub_url(url)
    except LocatorError as e:
        logger.error(f"Failed to resolve {resource_type} resource '{name}': {e}")
        raise

    logger.info(f"Resolved {resource_type} resource '{name}': {url} -> {canonical}")
    return canonical


def _effective_environ(config: Dict[str, Any], environ: Optional[Sequence[str]]) -> List[str]:
    configured = environ_snapshot({k: str(v) for k, v in config["ENVIRONMENT"].items()})
    if configured:
        logger.debug(f"Using {len(configured)} environment entries from configuration")
    base = environ_snapshot() if environ is None else list(environ)
    return configured + base
