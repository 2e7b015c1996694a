"""
CLI module for forced-settings.

Provides the command-line interface using Click.
"""

from forced_settings.cli.main import cli, main

__all__ = ["main", "cli"]
