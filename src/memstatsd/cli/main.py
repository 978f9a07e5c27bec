"""
Command-line interface for the memstatsd reporting agent.

This module is a thin wrapper: it loads configuration, applies command-line
overrides, builds a metrics client and a MemStatsAgent, and keeps the process
alive until it is signalled (or until `--duration` elapses).
"""

import argparse
import logging
import signal
import sys
import threading
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from ..agent import MemStatsAgent
from ..config import get_config, get_config_path, set_config_path
from ..models.config import AppConfig
from ..reporting.metrics_client import LoggingMetricsClient, create_statsd_client
from ..validation import (
    ValidationError,
    handle_cli_error,
    validate_metric_prefix,
    validate_port,
    validate_positive_float,
)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="memstatsd",
        description="Report Python runtime memory statistics to statsd.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help=f"Path to config.toml. Defaults to {get_config_path()} if it exists.",
    )
    parser.add_argument("--prefix", type=str, help="Metric name prefix (overrides [agent] prefix).")
    parser.add_argument(
        "-i", "--interval", type=str, help="Reporting interval in seconds (overrides [agent] interval_seconds)."
    )
    parser.add_argument("--statsd-host", type=str, help="Statsd host (overrides [statsd] host).")
    parser.add_argument("--statsd-port", type=str, help="Statsd UDP port (overrides [statsd] port).")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log a trace line on every tick and enable DEBUG logging.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log metrics instead of sending them to statsd.",
    )
    parser.add_argument(
        "--duration",
        type=str,
        help="Stop after this many seconds. Runs until SIGINT/SIGTERM by default.",
    )
    return parser


def load_app_config(config_path: Optional[Path]) -> AppConfig:
    """
    Load configuration from an explicit path, the default path, or defaults.

    An explicitly given path must exist; a missing default file is not an
    error and yields the built-in defaults.
    """
    if config_path is not None:
        set_config_path(config_path)
        return get_config()
    if get_config_path().exists():
        return get_config()
    logger.info(f"No configuration file at {get_config_path()}, using built-in defaults")
    return AppConfig()


def apply_overrides(app_config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """
    Apply command-line overrides on top of the loaded configuration.

    Raises:
        ValidationError: If an override value is invalid
    """
    agent = app_config.agent
    statsd_config = app_config.statsd

    if args.prefix is not None:
        agent = replace(agent, prefix=validate_metric_prefix(args.prefix, field_name="--prefix"))
    if args.interval is not None:
        agent = replace(
            agent,
            interval_seconds=validate_positive_float(
                args.interval, min_value=0.001, field_name="--interval"
            ),
        )
    if args.debug:
        agent = replace(agent, debug=True)
    if args.statsd_host is not None:
        statsd_config = replace(statsd_config, host=args.statsd_host)
    if args.statsd_port is not None:
        statsd_config = replace(
            statsd_config, port=validate_port(args.statsd_port, field_name="--statsd-port")
        )

    return AppConfig(agent=agent, statsd=statsd_config)


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for the memstatsd agent.

    Raises:
        SystemExit: On configuration or argument errors.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
    )

    try:
        app_config = apply_overrides(load_app_config(args.config), args)
        duration = (
            validate_positive_float(args.duration, min_value=0.0, field_name="--duration")
            if args.duration is not None
            else None
        )
    except (FileNotFoundError, KeyError, ValidationError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            logger=logger,
        )
    except Exception as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            include_traceback=True,
            logger=logger,
        )

    if args.dry_run:
        client = LoggingMetricsClient()
    else:
        client = create_statsd_client(
            host=app_config.statsd.host,
            port=app_config.statsd.port,
            prefix=app_config.statsd.prefix,
            max_udp_size=app_config.statsd.max_udp_size,
            ipv6=app_config.statsd.ipv6,
        )

    shutdown_requested = threading.Event()

    def signal_handler(signum, frame):
        if shutdown_requested.is_set():
            logger.warning("Shutdown already in progress.")
            return
        logger.info(
            f"Signal {signal.strsignal(signum)} received. Initiating graceful shutdown..."
        )
        shutdown_requested.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    agent = MemStatsAgent.from_config(app_config.agent, client)
    agent.start(app_config.agent.interval_seconds)
    try:
        shutdown_requested.wait(duration)
    finally:
        agent.stop()

    logger.info("memstatsd agent exited")


if __name__ == "__main__":
    main_cli()
