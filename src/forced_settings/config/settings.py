"""
Settings for the forced-settings tool itself, using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with FORCED_SETTINGS_ prefix
3. Field defaults

These settings describe how files are loaded and merged (application
root, strict mode, section names). They are unrelated to the host
settings the loaded files contain.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import forced_settings.constants as constants


class Settings(_pydantic_settings.BaseSettings):
    """
    Tool configuration.

    Environment variables:
        FORCED_SETTINGS_APP_ROOT: Base directory for relative override
            loader paths. Defaults to the working directory of the process
            that creates the settings, so bootstrap code using relative
            override paths should set it explicitly.
        FORCED_SETTINGS_STRICT: Raise on unreadable or malformed files
            instead of ignoring them (default: false).
        FORCED_SETTINGS_CORE_SECTION: Section merged into top-level fields.
        FORCED_SETTINGS_PLUGIN_SETTINGS_ATTR: Destination attribute for
            per-component settings.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        extra="ignore",
    )

    app_root: _pathlib.Path = _pydantic.Field(
        default_factory=_pathlib.Path.cwd,
        description="Base directory for relative override loader paths",
    )

    strict: bool = _pydantic.Field(
        default=False,
        description="Surface read, parse and structure errors",
    )

    core_section: str = _pydantic.Field(
        default=constants.DEFAULT_CORE_SECTION,
        description="Section whose settings become top-level fields",
    )

    plugin_settings_attr: str = _pydantic.Field(
        default=constants.DEFAULT_PLUGIN_SETTINGS_ATTR,
        description="Destination attribute holding per-component settings",
    )

    @_pydantic.field_validator("core_section", "plugin_settings_attr")
    @classmethod
    def _validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @_pydantic.field_validator("core_section")
    @classmethod
    def _validate_core_section(cls, v: str) -> str:
        if v == constants.TOOL_SECTION:
            raise ValueError(f"'{constants.TOOL_SECTION}' is reserved for load metadata")
        return v

    @_pydantic.field_validator("app_root")
    @classmethod
    def _validate_app_root(cls, v: _pathlib.Path) -> _pathlib.Path:
        return v.expanduser().resolve()

    def resolve_app_path(self, path: str | _os.PathLike[str]) -> _pathlib.Path:
        """
        Make a path absolute, treating relative paths as relative to app_root.

        Args:
            path: Absolute or app-root-relative path.

        Returns:
            Absolute path.
        """
        candidate = _pathlib.Path(path).expanduser()
        if candidate.is_absolute():
            return candidate
        return self.app_root / candidate

    def describe(self) -> dict[str, _typing.Any]:
        """Settings as a JSON-serializable dict."""
        return self.model_dump(mode="json")
