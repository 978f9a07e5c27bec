"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
"""

import logging
import tomllib
from pathlib import Path
from typing import Optional

from ..models.config import AppConfig
from ..validation import ValidationError, handle_config_error
from .loader import load_main_config
from .validators import validate_app_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[AppConfig] = None

# Default path to the configuration file, relative to the repository root.
# Overridden by the CLI `--config` option and by tests.
_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    Clears any cached configuration so the next `get_config()` call reads
    the new file.

    Args:
        config_path: Path to the config.toml file
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = config_path
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def get_config_path() -> Path:
    return _CONFIG_FILE_PATH


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path) -> AppConfig:
    """
    Load and validate the application configuration.

    Args:
        config_path: Path to the config.toml file

    Returns:
        Fully validated AppConfig instance

    Raises:
        FileNotFoundError: If the configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    try:
        config_data = load_main_config(config_path)
        app_config = validate_app_config(config_data)
        logger.info(
            f"Successfully loaded configuration: prefix='{app_config.agent.prefix}', "
            f"interval={app_config.agent.interval_seconds}s, "
            f"statsd={app_config.statsd.host}:{app_config.statsd.port}"
        )
        return app_config

    except FileNotFoundError as e:
        handle_config_error(e, "loading configuration file", logger=logger)
    except (ValidationError, tomllib.TOMLDecodeError) as e:
        handle_config_error(e, "validating configuration", logger=logger)
    except Exception as e:
        handle_config_error(
            e, "processing configuration", include_traceback=True, logger=logger
        )


def get_config() -> AppConfig:
    """
    Get the global application configuration, loading it if necessary.

    Returns:
        The singleton AppConfig instance

    Raises:
        FileNotFoundError: If the configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None
