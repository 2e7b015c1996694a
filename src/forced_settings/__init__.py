"""
forced-settings - force host application settings from a file.

Loads a settings file (JSON or YAML built in, any format through custom
loaders) and merges it into a host configuration object at startup.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("forced-settings")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from forced_settings.config import Settings  # noqa: E402
from forced_settings.errors import (  # noqa: E402
    ConfigFileError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigReadError,
    ConfigStructureError,
    ForcedSettingsError,
    LoaderResolutionError,
)
from forced_settings.loaders import ConfigLoader, register_loader  # noqa: E402
from forced_settings.merge import HostConfig, apply, merge_sections  # noqa: E402
from forced_settings.resolver import LoaderResolver  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "ConfigFileError",
    "ConfigLoader",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigReadError",
    "ConfigStructureError",
    "ForcedSettingsError",
    "HostConfig",
    "LoaderResolutionError",
    "LoaderResolver",
    "Settings",
    "apply",
    "merge_sections",
    "register_loader",
]
