"""
Validation functions for configuration values and command-line arguments.
"""

import re
from datetime import timedelta
from typing import Any, Optional, Union

from .exceptions import ValidationError

# Statsd bucket names must not contain the protocol separators.
_METRIC_PREFIX_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]*$")


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a positive float.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_interval(
    value: Union[float, int, timedelta],
    field_name: str = "interval"
) -> float:
    """
    Validate a reporting interval given in seconds or as a timedelta.

    Returns:
        The interval in seconds.

    Raises:
        ValidationError: If the interval is not strictly positive
    """
    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    else:
        seconds = validate_positive_float(value, field_name=field_name)
    if seconds <= 0:
        raise ValidationError(
            f"{field_name} must be greater than 0, got {value}",
            field_name=field_name,
            value=value
        )
    return seconds


def validate_port(value: Any, field_name: str = "port") -> int:
    """Validate a UDP/TCP port number."""
    return validate_positive_integer(
        value, min_value=1, max_value=65535, field_name=field_name
    )


def validate_boolean(value: Any, field_name: str = "value") -> bool:
    """Validate that a value is a real boolean (TOML `true`/`false`)."""
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a boolean, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_hostname(value: Any, field_name: str = "host") -> str:
    """Validate that a host name is a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value.strip()


def validate_metric_prefix(value: Any, field_name: str = "prefix") -> str:
    """
    Validate a metric name prefix.

    The prefix may be empty. It must not contain characters that are
    meaningful in the statsd line protocol (':', '|', '@') or whitespace.
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {value!r}",
            field_name=field_name,
            value=value
        )
    if not _METRIC_PREFIX_PATTERN.match(value):
        raise ValidationError(
            f"{field_name} contains invalid characters: '{value}'",
            field_name=field_name,
            value=value
        )
    return value
