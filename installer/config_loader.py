# installer/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the application.

Handles loading settings from Pydantic model defaults, environment variables,
a YAML profile and command-line arguments, applying a specific order of
precedence:
1. Pydantic Model Defaults
2. Environment Variables (HYPRRICE_ prefix, nested with '__')
3. YAML Configuration File
4. Command-Line Arguments
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from installer.config import PROJECT_ROOT
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yaml"

# argparse destination -> AppSettings field
CLI_FIELD_MAP: Dict[str, str] = {
    "noconfirm": "noconfirm",
    "auto_elevate": "auto_elevate",
    "log_prefix": "log_prefix",
    "components": "components",
}


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates a dictionary `source` with values from `overrides`.
    Nested dictionaries are merged key by key; any other value, None
    included, replaces the one in `source`.

    Returns:
        The updated `source` dictionary.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        else:
            source[key] = value
    return source


def _resolve_config_path(config_file_path: Union[str, Path]) -> Path:
    """Relative paths are looked up in the working directory, then the project root."""
    path = Path(config_file_path).expanduser()
    if path.is_absolute() or path.exists():
        return path
    return PROJECT_ROOT / path


def load_yaml_file(
    yaml_config_path: Path,
    current_logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """
    Read a YAML profile. A missing, empty, unreadable or non-mapping file
    yields an empty dict and a logged message.
    """
    logger_to_use = current_logger if current_logger else module_logger

    if not yaml_config_path.is_file():
        logger_to_use.info(
            f"Configuration file '{yaml_config_path}' not found. Using defaults, environment variables, and CLI args."
        )
        return {}

    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except IOError as e:
        logger_to_use.warning(
            f"Could not read config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
        return {}

    logger_to_use.info(f"Loaded configuration from {yaml_config_path}")
    return yaml_data


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: Union[str, Path] = DEFAULT_CONFIG_FILE,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings with the following precedence:
    1. Pydantic Model Defaults.
    2. Environment Variables (BaseSettings loads these on instantiation).
    3. Values from the YAML configuration file.
    4. Command-Line Arguments (highest precedence, overrides all else).

    Args:
        cli_args: Parsed command-line arguments (from argparse).
        config_file_path: Path to the YAML configuration file.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        SystemExit: The merged configuration does not validate.
    """
    logger_to_use = current_logger if current_logger else module_logger

    try:
        # Model defaults < environment variables
        current_values_dict = AppSettings().model_dump(mode="json")
    except ValidationError as e:
        logger_to_use.error(f"Invalid configuration in environment: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    yaml_data = load_yaml_file(
        _resolve_config_path(config_file_path), logger_to_use
    )
    current_values_dict = _deep_update(current_values_dict, yaml_data)

    if cli_args:
        mapped_cli_values: Dict[str, Any] = {}
        for cli_key, cli_value in vars(cli_args).items():
            field = CLI_FIELD_MAP.get(cli_key)
            if field is None or cli_value is None:
                continue
            # store_true flags left at False and empty lists do not override
            if cli_value is False or cli_value == []:
                continue
            mapped_cli_values[field] = cli_value
        current_values_dict = _deep_update(
            current_values_dict, mapped_cli_values
        )

    try:
        final_settings = AppSettings(**current_values_dict)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    logger_to_use.debug("Successfully loaded and validated application settings")
    return final_settings
