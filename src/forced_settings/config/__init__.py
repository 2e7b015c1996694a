"""
Configuration module for forced-settings.

Uses pydantic-settings for environment variable loading.
"""

from forced_settings.config.settings import Settings

__all__ = ["Settings"]
