"""
Validation and error handling for the memstatsd package.

This module provides input validation and error handling with consistent
error reporting across the application.
"""

# Core exception classes and error handling
from .exceptions import (
    ValidationError,
    handle_error,
    handle_config_error,
    handle_cli_error,
)

# Validation functions
from .validators import (
    validate_boolean,
    validate_hostname,
    validate_interval,
    validate_metric_prefix,
    validate_port,
    validate_positive_float,
    validate_positive_integer,
)

__all__ = [
    # Core functionality
    "ValidationError",
    "handle_error",
    "handle_config_error",
    "handle_cli_error",
    # Validators
    "validate_boolean",
    "validate_hostname",
    "validate_interval",
    "validate_metric_prefix",
    "validate_port",
    "validate_positive_float",
    "validate_positive_integer",
]
