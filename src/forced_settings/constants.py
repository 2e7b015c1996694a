"""
Shared constants for forced-settings.

This module provides a single source of truth for reserved section
names and metadata keys used across loaders, the resolver and the merge.
"""

TOOL_SECTION = "forced_settings"
"""Reserved component name holding provenance metadata about the load."""

DEFAULT_CORE_SECTION = "core"
"""Component whose settings become top-level fields on the destination."""

DEFAULT_PLUGIN_SETTINGS_ATTR = "forced_plugin_settings"
"""Destination attribute holding the per-component settings mapping."""

CONFIGFILE_KEY = "configfile"
"""Provenance key recording the path of the loaded file."""

LOADER_KEY = "loader"
"""Provenance key recording the dotted name of the loader class used."""

OVERRIDE_MODULE_PREFIX = "forced_settings_overrides"
"""Package prefix for modules imported from override loader files."""

ENV_PREFIX = "FORCED_SETTINGS_"
"""Prefix for environment variables configuring the tool itself."""
