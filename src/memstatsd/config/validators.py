"""
Configuration validation utilities.

This module turns the raw `[agent]` and `[statsd]` tables into validated
configuration objects.
"""

import logging
from typing import Any, Dict

from ..models.config import AgentConfig, AppConfig, StatsdConfig
from ..validation import (
    ValidationError,
    validate_boolean,
    validate_hostname,
    validate_metric_prefix,
    validate_port,
    validate_positive_float,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)


def validate_agent_config(agent_data: Dict[str, Any]) -> AgentConfig:
    """
    Validate and create an AgentConfig from raw configuration data.

    Args:
        agent_data: Raw `[agent]` table from TOML

    Returns:
        Validated AgentConfig instance

    Raises:
        ValidationError: If validation fails
    """
    defaults = AgentConfig()
    latency_settings = agent_data.get("latency", {})

    prefix = validate_metric_prefix(
        agent_data.get("prefix", defaults.prefix),
        field_name="agent.prefix",
    )

    interval_seconds = validate_positive_float(
        agent_data.get("interval_seconds", defaults.interval_seconds),
        min_value=0.001,  # 1ms minimum
        max_value=86400.0,  # one day maximum
        field_name="agent.interval_seconds",
    )

    debug = validate_boolean(
        agent_data.get("debug", defaults.debug),
        field_name="agent.debug",
    )

    stop_timeout = validate_positive_float(
        agent_data.get("stop_timeout", defaults.stop_timeout),
        min_value=0.1,
        max_value=60.0,
        field_name="agent.stop_timeout",
    )

    latency_wait_ms = validate_positive_float(
        latency_settings.get("wait_ms", defaults.latency_wait_ms),
        min_value=1.0,
        max_value=10000.0,
        field_name="agent.latency.wait_ms",
    )

    latency_size_bytes = validate_positive_integer(
        latency_settings.get("size_bytes", defaults.latency_size_bytes),
        min_value=1,
        max_value=64 * 1024 * 1024,
        field_name="agent.latency.size_bytes",
    )

    if latency_wait_ms / 1000.0 >= interval_seconds:
        logger.warning(
            f"agent.latency.wait_ms ({latency_wait_ms}ms) is not shorter than "
            f"agent.interval_seconds ({interval_seconds}s); latency ticks will be delayed"
        )

    return AgentConfig(
        prefix=prefix,
        interval_seconds=interval_seconds,
        debug=debug,
        latency_wait_ms=latency_wait_ms,
        latency_size_bytes=latency_size_bytes,
        stop_timeout=stop_timeout,
    )


def validate_statsd_config(statsd_data: Dict[str, Any]) -> StatsdConfig:
    """
    Validate and create a StatsdConfig from raw configuration data.

    Args:
        statsd_data: Raw `[statsd]` table from TOML

    Returns:
        Validated StatsdConfig instance

    Raises:
        ValidationError: If validation fails
    """
    defaults = StatsdConfig()

    host = validate_hostname(
        statsd_data.get("host", defaults.host), field_name="statsd.host"
    )
    port = validate_port(
        statsd_data.get("port", defaults.port), field_name="statsd.port"
    )
    prefix = validate_metric_prefix(
        statsd_data.get("prefix", defaults.prefix), field_name="statsd.prefix"
    )
    max_udp_size = validate_positive_integer(
        statsd_data.get("max_udp_size", defaults.max_udp_size),
        min_value=64,
        max_value=65507,
        field_name="statsd.max_udp_size",
    )
    ipv6 = validate_boolean(
        statsd_data.get("ipv6", defaults.ipv6), field_name="statsd.ipv6"
    )

    return StatsdConfig(
        host=host,
        port=port,
        prefix=prefix,
        max_udp_size=max_udp_size,
        ipv6=ipv6,
    )


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """
    Validate the whole configuration file.

    Missing sections fall back to their defaults.
    """
    agent_data = config_data.get("agent", {})
    statsd_data = config_data.get("statsd", {})
    if not isinstance(agent_data, dict):
        raise ValidationError("[agent] must be a table", field_name="agent")
    if not isinstance(statsd_data, dict):
        raise ValidationError("[statsd] must be a table", field_name="statsd")

    return AppConfig(
        agent=validate_agent_config(agent_data),
        statsd=validate_statsd_config(statsd_data),
    )
