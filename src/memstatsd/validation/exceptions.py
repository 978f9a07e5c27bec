"""
Error types and logging helpers.

Configuration problems are logged with their context and re-raised to the
caller; the command-line entry point logs them once more and exits.
"""

import logging
import sys
from typing import Any, NoReturn, Optional

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """
    Raised when a configuration value or command-line argument is invalid.

    Attributes:
        field_name: Dotted name of the offending field or the CLI flag
        value: The rejected value
    """

    def __init__(self, message: str, field_name: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field_name = field_name
        self.value = value


def handle_error(
    error: Exception,
    context: str,
    include_traceback: bool = False,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log an error with its context and optionally re-raise it.

    Expected failures (missing file, bad value) are logged at ERROR without a
    traceback. With `include_traceback` the error is treated as unexpected and
    logged at CRITICAL with the traceback attached.
    """
    effective_logger = logger or globals()['logger']
    error_msg = f"Error in {context}: {error}"

    if include_traceback:
        effective_logger.critical(error_msg, exc_info=error)
    else:
        effective_logger.error(error_msg)

    if reraise:
        raise error


def handle_config_error(
    error: Exception,
    context: str,
    include_traceback: bool = False,
    logger: Optional[logging.Logger] = None
) -> NoReturn:
    """Log a configuration error and re-raise it."""
    handle_error(error, f"config {context}", include_traceback=include_traceback, logger=logger)
    raise error


def handle_cli_error(
    error: Exception,
    context: str,
    exit_code: int = 1,
    include_traceback: bool = False,
    logger: Optional[logging.Logger] = None
) -> NoReturn:
    """Log a CLI error and exit the process."""
    handle_error(
        error,
        f"CLI {context}",
        include_traceback=include_traceback,
        reraise=False,
        logger=logger,
    )
    sys.exit(exit_code)
