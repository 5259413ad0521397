"""
Configuration loading and validation for resource resolution.

Single entry point for config processing:
    load -> merge defaults -> validate structure -> validate parameters

Schema comes from config_defaults.yaml; users specify only what differs
from the defaults. Errors are collected per stage and raised together.
"""

import copy
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

RESOURCE_TYPES = ("blob", "docstore", "pubsub")


class ConfigValidationError(ValueError):
    """Exception raised for configuration validation errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        context = f" at '{path}'" if path else ""
        super().__init__(f"{message}{context}")


# --- Defaults Loading ---


@lru_cache(maxsize=1)
def get_defaults() -> Dict[str, Any]:
    """Load and cache config_defaults.yaml.

    Returns:
        Dict containing all default values.
    """
    defaults_path = Path(__file__).parent.parent / "config_defaults.yaml"
    if not defaults_path.exists():
        return {}

    with open(defaults_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


# --- Deep Merge ---


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary (typically defaults).
        override: Override dictionary (typically user config).

    Returns:
        Merged dictionary.
    """
    result = copy.deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)

    return result


# --- Validation Pipeline ---


def _validate_file(config_path: str) -> str:
    """Stage 1: Validate file exists and is a file.

    Raises:
        ConfigValidationError: If file doesn't exist.
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigValidationError(f"Configuration file not found: {config_path}")

    if not path.is_file():
        raise ConfigValidationError(f"Path is not a file: {config_path}")

    return str(path.absolute())


def _validate_format(config_path: str) -> Dict[str, Any]:
    """Stage 2: Parse file as YAML or JSON.

    Raises:
        ConfigValidationError: If file can't be parsed or isn't a mapping.
    """
    path = Path(config_path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in [".json"]:
                config = json.load(f)
            elif path.suffix.lower() in [".yaml", ".yml"]:
                config = yaml.safe_load(f) or {}
            else:
                # Try JSON first, then YAML
                content = f.read()
                try:
                    config = json.loads(content)
                except json.JSONDecodeError:
                    config = yaml.safe_load(content) or {}
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigValidationError(f"Failed to parse configuration file: {e}")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration must be a mapping", config_path)
    return config


def _validate_structure(config: Dict[str, Any]) -> List[str]:
    """Stage 3: Validate section types and required resource fields.

    Returns:
        List of validation errors (empty if valid).
    """
    errors = []

    if not isinstance(config.get("ENVIRONMENT"), dict):
        errors.append("ENVIRONMENT must be a mapping of variable names to values")

    schema = config.get("SCHEMA")
    if not isinstance(schema, dict):
        errors.append("SCHEMA must be a mapping")

    resources = config.get("RESOURCES")
    if not isinstance(resources, dict):
        errors.append("RESOURCES must be a mapping of resource names to definitions")
        return errors

    for name, resource in resources.items():
        if not isinstance(resource, dict):
            errors.append(f"RESOURCES.{name} must be a mapping")
            continue
        for field in ["type", "url"]:
            if field not in resource or resource[field] is None:
                errors.append(f"Missing required field: RESOURCES.{name}.{field}")

    return errors


def _validate_parameters(config: Dict[str, Any]) -> List[str]:
    """Stage 4: Validate parameter values and relationships.

    Validates:
    - Resource types are known
    - OPTIONS are given only for docstore resources, with known keys and string values
    - Capacity units are positive integers

    Returns:
        List of validation errors (empty if valid).
    """
    from ..docstore.base import NormalizationOptions

    errors = []

    for name, resource in config["RESOURCES"].items():
        resource_type = resource.get("type")
        if resource_type not in RESOURCE_TYPES:
            errors.append(
                f"Invalid RESOURCES.{name}.type: '{resource_type}'. Expected one of {list(RESOURCE_TYPES)}"
            )
        if not isinstance(resource.get("url"), str):
            errors.append(f"RESOURCES.{name}.url must be a string")

        options = resource.get("OPTIONS")
        if options is None:
            continue
        if resource_type != "docstore":
            errors.append(f"RESOURCES.{name}.OPTIONS is only supported for docstore resources")
        elif not isinstance(options, dict):
            errors.append(f"RESOURCES.{name}.OPTIONS must be a mapping")
        else:
            unknown = sorted(set(options) - set(NormalizationOptions.field_names()))
            if unknown:
                errors.append(
                    f"Unknown RESOURCES.{name}.OPTIONS keys: {unknown}. "
                    f"Available: {NormalizationOptions.field_names()}"
                )
            for key, value in options.items():
                if value is not None and not isinstance(value, str):
                    errors.append(f"RESOURCES.{name}.OPTIONS.{key} must be a string, got {value!r}")

    for field in ["read_capacity_units", "write_capacity_units"]:
        value = config["SCHEMA"].get(field)
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            errors.append(f"SCHEMA.{field} must be a positive integer, got {value!r}")

    return errors


def _finalize(user_config: Dict[str, Any]) -> Dict[str, Any]:
    """Merge defaults, then run the structure and parameter stages."""
    merged = deep_merge(get_defaults(), user_config)

    structure_errors = _validate_structure(merged)
    if structure_errors:
        raise ConfigValidationError("Configuration structure errors:\n  - " + "\n  - ".join(structure_errors))

    param_errors = _validate_parameters(merged)
    if param_errors:
        raise ConfigValidationError("Configuration parameter errors:\n  - " + "\n  - ".join(param_errors))

    return merged


# --- Main Entry Point ---


def load_config(source: str | Path | Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Canonical entry point. Accepts file path, dict, or None (returns defaults).

    Parameters
    ----------
    source : str | Path | dict | None
        YAML/JSON file path, pre-parsed dict, or ``None`` for pure defaults.
        When a dict is supplied, file-loading stages are skipped.

    Returns
    -------
    dict
        Fully validated and merged configuration.

    Raises
    ------
    ConfigValidationError
        If validation fails.
    """
    if source is None or isinstance(source, dict):
        return _finalize(source or {})
    return process_config(str(source))


def process_config(config_path: str) -> Dict[str, Any]:
    """Process configuration file through full validation pipeline.

    Pipeline stages:
    1. Validate file exists and is readable
    2. Parse and validate format (YAML/JSON)
    3. Merge with defaults (deep merge)
    4. Validate structure (section types, required resource fields)
    5. Validate parameters (resource types, options, capacities)

    Raises:
        ConfigValidationError: If any validation stage fails.
    """
    validated_path = _validate_file(config_path)
    user_config = _validate_format(validated_path)
    return _finalize(user_config)
