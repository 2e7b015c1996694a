"""
Exception hierarchy for forced-settings.

Every failure raised while resolving a loader or reading a settings file
derives from ForcedSettingsError, so bootstrap code can catch one type.
"""

from __future__ import annotations

import os as _os
import pathlib as _pathlib


class ForcedSettingsError(Exception):
    """Base class for all forced-settings errors."""

    pass


class ConfigFileError(ForcedSettingsError):
    """Error tied to a specific file on disk."""

    def __init__(self, path: str | _os.PathLike[str], message: str) -> None:
        self.path = _pathlib.Path(path)
        super().__init__(message)


class ConfigNotFoundError(ConfigFileError):
    """A settings file, or an override loader file, does not exist."""

    pass


class ConfigReadError(ConfigFileError):
    """The file exists but could not be read."""

    pass


class ConfigParseError(ConfigFileError):
    """The file content is not well-formed for the loader's format."""

    def __init__(
        self,
        path: str | _os.PathLike[str],
        message: str,
        diagnostic: str = "",
    ) -> None:
        self.diagnostic = diagnostic
        super().__init__(path, message)


class ConfigStructureError(ConfigFileError):
    """The file parsed, but its root is not a mapping of sections."""

    pass


class LoaderResolutionError(ForcedSettingsError):
    """No usable loader could be found for a file extension."""

    def __init__(self, extension: str, message: str) -> None:
        self.extension = extension
        super().__init__(message)
