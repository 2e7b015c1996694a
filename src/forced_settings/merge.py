"""
Merging loaded settings into a host configuration object.

Call apply() from bootstrap code before the host application starts:

    cfg = HostConfig()
    apply(cfg, "/srv/app/.settings.json")
    apply(cfg, "settings.toml", {"toml": "local/loaders/toml_loader.py"})

The core section becomes attributes on the destination. Every other
section is stored wholesale in the destination's per-component mapping
(``forced_plugin_settings`` by default).
"""

from __future__ import annotations

import logging as _logging
import os as _os
import typing as _typing

import forced_settings.config as config
import forced_settings.constants as constants
import forced_settings.loaders.base as base
import forced_settings.loaders.registry as registry
import forced_settings.resolver as resolver

_logger = _logging.getLogger(__name__)


class HostConfig:
    """
    Mutable host configuration object.

    Top-level settings are plain attributes. Per-component settings live
    in a dict attribute created by the merge when first needed.
    """

    def __init__(self, **fields: _typing.Any) -> None:
        self.__dict__.update(fields)

    def as_dict(self) -> dict[str, _typing.Any]:
        """All fields as a plain dict."""
        return dict(self.__dict__)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HostConfig):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"HostConfig({fields})"


def merge_sections(
    destination: _typing.Any,
    sections: base.SectionedMapping,
    *,
    core_section: str = constants.DEFAULT_CORE_SECTION,
    plugin_settings_attr: str = constants.DEFAULT_PLUGIN_SETTINGS_ATTR,
) -> None:
    """
    Copy sectioned settings onto a destination object.

    Core settings overwrite same-named attributes. Other sections replace
    any previous value for that component. Nothing is ever deleted.

    Args:
        destination: Object accepting attribute assignment.
        sections: Sectioned mapping to apply.
        core_section: Section whose settings become attributes.
        plugin_settings_attr: Attribute holding per-component settings.
    """
    for component, values in sections.items():
        if component == core_section:
            for setting, value in values.items():
                setattr(destination, str(setting), value)
            continue

        plugin_settings = getattr(destination, plugin_settings_attr, None)
        if plugin_settings is None:
            plugin_settings = {}
            setattr(destination, plugin_settings_attr, plugin_settings)
        plugin_settings[component] = values


def apply(
    destination: _typing.Any,
    filepath: str | _os.PathLike[str],
    overrides: resolver.OverrideTable | None = None,
    *,
    settings: config.Settings | None = None,
    loader_registry: registry.LoaderRegistry | None = None,
    strict: bool | None = None,
) -> None:
    """
    Load a settings file and merge it into a host configuration object.

    Args:
        destination: Host configuration object, modified in place.
        filepath: Settings file to load.
        overrides: Optional extension -> loader file table. Relative
            loader paths resolve against settings.app_root.
        settings: Tool settings (default: read from environment).
        loader_registry: Registry of built-in loaders (default: global).
        strict: Overrides settings.strict when given.

    Raises:
        ForcedSettingsError: Any resolution or loading failure, unchanged.
    """
    if settings is None:
        settings = config.Settings()

    loader = resolver.LoaderResolver(settings, loader_registry, strict=strict).resolve(
        filepath, overrides
    )
    # Custom loaders are not required to normalize their output
    sections = base.normalize_sections(loader.load(filepath), settings.core_section)

    tool = base.tool_section(sections)
    tool[constants.LOADER_KEY] = loader.identifier()
    tool.setdefault(constants.CONFIGFILE_KEY, str(filepath))

    merge_sections(
        destination,
        sections,
        core_section=settings.core_section,
        plugin_settings_attr=settings.plugin_settings_attr,
    )
    _logger.debug(
        "Applied %d section(s) from %s using %s",
        len(sections),
        filepath,
        tool[constants.LOADER_KEY],
    )
