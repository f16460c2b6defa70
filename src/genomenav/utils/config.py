"""Configuration management and validation."""

import copy
import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Union

import yaml

from genomenav.core.types import RegionDescriptor, ValidationResult, validate_region_descriptor
from genomenav.core.exceptions import ConfigurationError
from genomenav.core.feature import Feature
from genomenav.core.interval import ChromosomeInterval
from genomenav.modules.navigation_context import NavigationContext


logger = logging.getLogger(__name__)


def create_default_configuration() -> Dict[str, Any]:
    """
    Create default configuration.

    Returns:
        Default configuration dictionary
    """
    config = {
        "context": {
            "name": "default",
            "regions": [
                {"name": "chr1", "chr": "chr1", "start": 0, "end": 248956422},
                {"name": "Gap", "gap": 1000000},
                {"name": "chr2", "chr": "chr2", "start": 0, "end": 242193529}
            ]
        },
        "view": {
            "start": 0,
            "end": None,
            "width": 1000
        },
        "layout": {
            "num_rows": 10,
            "padding": 0
        },
        "output": {
            "compress": False
        },
        "logging": {
            "level": "INFO",
            "file": None
        }
    }
    return config


def load_configuration(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load and validate configuration from file.

    Args:
        config_path: Path to configuration file (YAML or JSON)

    Returns:
        Validated configuration dictionary

    Raises:
        ConfigurationError: Invalid configuration
        FileNotFoundError: Configuration file not found
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                config = yaml.safe_load(f)
            elif config_path.suffix.lower() == '.json':
                config = json.load(f)
            else:
                raise ConfigurationError(
                    f"Unsupported config file format: {config_path.suffix}", config_path=config_path
                )

    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error parsing configuration file: {e}", config_path=config_path)

    if not isinstance(config, dict):
        raise ConfigurationError("Configuration file must contain a mapping", config_path=config_path)

    config = merge_configurations(create_default_configuration(), config, replace_lists=True)

    validation_result = validate_configuration_schema(config)
    if not validation_result.is_valid:
        raise ConfigurationError(
            f"Configuration validation failed: {validation_result.errors}", config_path=config_path
        )
    for warning in validation_result.warnings:
        logger.warning(warning)

    logger.info(f"Loaded configuration from {config_path}")
    return config


def validate_configuration_schema(config: Dict[str, Any]) -> ValidationResult:
    """
    Check configuration structure and region descriptors.

    Args:
        config: Configuration dictionary

    Returns:
        ValidationResult with validation status
    """
    errors = []
    warnings = []

    context = config.get("context")
    if not isinstance(context, dict):
        errors.append("'context' must be a dictionary")
        regions = []
    else:
        regions = context.get("regions", [])
        if not isinstance(regions, list):
            errors.append("'context.regions' must be a list")
            regions = []
        elif not regions:
            warnings.append("'context.regions' is empty - the navigation context will have no bases")

    seen_names = set()
    for i, region in enumerate(regions):
        if not isinstance(region, dict):
            errors.append(f"Region {i} must be a dictionary")
            continue
        try:
            descriptor = RegionDescriptor.from_dict(region)
            validate_region_descriptor(descriptor)
        except KeyError as e:
            errors.append(f"Region {i} is missing key {e}")
            continue
        except (TypeError, ValueError) as e:
            errors.append(f"Region {i}: {e}")
            continue
        if descriptor.name in seen_names:
            errors.append(f"Region {i}: duplicate region name \"{descriptor.name}\"")
        seen_names.add(descriptor.name)

    layout = config.get("layout", {})
    if not isinstance(layout, dict):
        errors.append("'layout' must be a dictionary")
    else:
        if not isinstance(layout.get("num_rows", 10), int):
            errors.append("'layout.num_rows' must be an integer")
        if not isinstance(layout.get("padding", 0), (int, float)):
            errors.append("'layout.padding' must be a number")

    view = config.get("view", {})
    if not isinstance(view, dict):
        errors.append("'view' must be a dictionary")
    else:
        if not isinstance(view.get("width", 1000), (int, float)):
            errors.append("'view.width' must be a number")
        for key in ("start", "end"):
            value = view.get(key)
            if value is not None and not isinstance(value, int):
                errors.append(f"'view.{key}' must be an integer or null")

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
        details={"n_regions": len(regions)}
    )


def merge_configurations(
    base_config: Dict[str, Any],
    override_config: Dict[str, Any],
    replace_lists: bool = True
) -> Dict[str, Any]:
    """
    Merge configuration dictionaries.

    Args:
        base_config: Base configuration
        override_config: Override parameters
        replace_lists: Lists (such as the region list) in the override replace
            the base list instead of being appended to it

    Returns:
        Merged configuration
    """
    def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries."""
        result = copy.deepcopy(base)
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = merge_dicts(result[key], value)
            elif (not replace_lists and key in result
                  and isinstance(result[key], list) and isinstance(value, list)):
                result[key] = result[key] + copy.deepcopy(value)
            else:
                result[key] = copy.deepcopy(value)
        return result

    return merge_dicts(base_config, override_config)


def save_configuration(config: Dict[str, Any], output_path: Union[str, Path]) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration dictionary
        output_path: Output file path

    Raises:
        ConfigurationError: Error saving configuration
    """
    output_path = Path(output_path)

    if output_path.suffix.lower() not in ['.yaml', '.yml', '.json']:
        raise ConfigurationError(f"Unsupported output format: {output_path.suffix}", config_path=output_path)

    try:
        with open(output_path, 'w') as f:
            if output_path.suffix.lower() in ['.yaml', '.yml']:
                yaml.safe_dump(config, f, default_flow_style=False, indent=2, sort_keys=False)
            else:
                json.dump(config, f, indent=2)

    except (yaml.YAMLError, TypeError, OSError) as e:
        raise ConfigurationError(f"Error saving configuration: {e}", config_path=output_path)


def build_features(regions: List[Dict[str, Any]]) -> List[Feature]:
    """
    Turn region descriptors into an ordered feature list.

    Args:
        regions: Region mappings, ``{name, chr, start, end[, strand]}`` or ``{name, gap}``

    Returns:
        Features in the given order; gap descriptors become gap features
    """
    features = []
    for region in regions:
        descriptor = RegionDescriptor.from_dict(region)
        validate_region_descriptor(descriptor)
        if descriptor.is_gap:
            features.append(Feature.make_gap(descriptor.end - descriptor.start, descriptor.name))
        else:
            features.append(Feature(
                descriptor.name,
                ChromosomeInterval(descriptor.chr, descriptor.start, descriptor.end),
                strand=descriptor.strand
            ))
    return features


def build_navigation_context(config: Dict[str, Any]) -> NavigationContext:
    """Build the navigation context described by ``config['context']``."""
    context_config = config.get("context", {})
    features = build_features(context_config.get("regions", []))
    return NavigationContext(context_config.get("name", "default"), features)
