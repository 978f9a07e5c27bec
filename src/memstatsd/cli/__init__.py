"""
Command-line interface for the memstatsd package.

This module provides the CLI entry point that runs the reporting agent.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
