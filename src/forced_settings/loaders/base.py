"""
Base classes for settings file loaders.

A loader turns one settings file into a sectioned mapping: a dict from
component name to a dict of that component's settings. Every loader,
built-in or supplied through an override file, subclasses ConfigLoader.
"""

from __future__ import annotations

import abc as _abc
import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import forced_settings.constants as constants
import forced_settings.errors as errors

_logger = _logging.getLogger(__name__)

# Component name -> {setting name -> JSON-like value}
SectionedMapping = dict[str, _typing.Any]


def index_keyed(items: list[_typing.Any]) -> dict[str, _typing.Any]:
    """Turn a list into a mapping keyed by each element's position."""
    return {str(index): value for index, value in enumerate(items)}


def normalize_sections(
    data: dict[str, _typing.Any] | list[_typing.Any],
    core_section: str = constants.DEFAULT_CORE_SECTION,
) -> SectionedMapping:
    """
    Put every loose top-level value into the core section.

    Top-level keys whose values are aggregates (mappings or lists) are
    component sections and are left alone. Scalars and null move into the
    core section under the same key and are removed from the top level.
    A list root is read as a mapping keyed by position, so its scalar
    elements end up in the core section under "0", "1", ...

    Args:
        data: Parsed document root.
        core_section: Name of the core section.

    Returns:
        A new sectioned mapping; ``data`` is not modified.
    """
    if isinstance(data, list):
        data = index_keyed(data)

    core = data.get(core_section)
    sections: SectionedMapping = {}
    relocated: dict[str, _typing.Any] = {}

    for key, value in data.items():
        if key == core_section:
            continue
        if isinstance(value, (dict, list)):
            sections[key] = value
        else:
            relocated[key] = value

    if isinstance(core, dict):
        core_values = dict(core)
    elif isinstance(core, list):
        core_values = index_keyed(core)
    else:
        core_values = {}
        if core is not None:
            # A scalar "core" key is itself a loose setting
            core_values[core_section] = core
    core_values.update(relocated)

    return {core_section: core_values, **sections}


def tool_section(sections: SectionedMapping) -> dict[str, _typing.Any]:
    """
    Get the provenance section of a sectioned mapping, creating it if needed.

    A list found under the reserved name is converted to a positional
    mapping so metadata keys can be added; any other non-mapping value is
    replaced.
    """
    tool = sections.get(constants.TOOL_SECTION)
    if isinstance(tool, list):
        tool = index_keyed(tool)
    elif not isinstance(tool, dict):
        tool = {}
    sections[constants.TOOL_SECTION] = tool
    return tool


class ConfigLoader(_abc.ABC):
    """
    Contract every settings loader implements.

    Subclasses must implement load() and declare the extensions they
    handle in supported_extensions().

    In strict mode every failure is raised. Otherwise read, parse and
    structure failures are logged and an empty mapping is returned, so a
    broken settings file cannot stop the host application from starting.
    A missing file is always an error.
    """

    def __init__(
        self,
        *,
        strict: bool = False,
        core_section: str = constants.DEFAULT_CORE_SECTION,
    ) -> None:
        self.strict = strict
        self.core_section = core_section

    @_abc.abstractmethod
    def load(self, filepath: str | _os.PathLike[str]) -> SectionedMapping:
        """
        Load settings from a file.

        Args:
            filepath: Path to the settings file.

        Returns:
            Sectioned mapping of component name to settings.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigReadError: If the file cannot be read (strict mode).
            ConfigParseError: If the content is malformed (strict mode).
            ConfigStructureError: If the root is not a mapping or list
                (strict mode).
        """
        ...

    @classmethod
    def supported_extensions(cls) -> frozenset[str]:
        """Extensions (without leading dot) this loader handles."""
        return frozenset()

    @classmethod
    def identifier(cls) -> str:
        """Dotted name of the concrete loader class."""
        return f"{cls.__module__}.{cls.__qualname__}"

    def _recover(self, error: errors.ConfigFileError) -> SectionedMapping:
        """Raise in strict mode, otherwise log and fall back to no settings."""
        if self.strict:
            raise error
        _logger.warning("Ignoring settings file %s: %s", error.path, error)
        return {}


class TextConfigLoader(ConfigLoader):
    """
    Loader for text formats that parse into a generic value tree.

    Handles file checks, reading, root validation and section
    normalization. Subclasses only implement parse().
    """

    format_name: _typing.ClassVar[str] = "text"

    @_abc.abstractmethod
    def parse(self, content: str, path: _pathlib.Path) -> _typing.Any:
        """
        Parse file content into a value tree.

        Raises:
            ConfigParseError: If the content is not well-formed.
        """
        ...

    def load(self, filepath: str | _os.PathLike[str]) -> SectionedMapping:
        """Load, validate and normalize a settings file."""
        path = _pathlib.Path(filepath)
        name = type(self).__name__

        if not path.is_file():
            raise errors.ConfigNotFoundError(
                path, f"{name}: File '{path}' does not exist."
            )

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return self._recover(
                errors.ConfigReadError(path, f"{name}: Cannot read file '{path}': {e}")
            )

        try:
            data = self.parse(content, path)
        except errors.ConfigParseError as e:
            return self._recover(e)

        if not isinstance(data, (dict, list)):
            return self._recover(
                errors.ConfigStructureError(
                    path,
                    f"{name}: {self.format_name} content in '{path}' is not a valid "
                    f"configuration structure (got {type(data).__name__}).",
                )
            )

        sections = normalize_sections(data, self.core_section)
        tool = tool_section(sections)
        tool[constants.CONFIGFILE_KEY] = str(filepath)
        _logger.debug("Loaded %d section(s) from %s", len(sections), path)
        return sections
