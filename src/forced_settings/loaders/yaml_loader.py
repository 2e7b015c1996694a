"""
YAML settings file loader.

Uses yaml.safe_load, so only standard YAML tags are accepted. An empty
document loads as an empty mapping.
"""

from __future__ import annotations

import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import forced_settings.errors as errors
import forced_settings.loaders.base as base


class YamlLoader(base.TextConfigLoader):
    """Loader for YAML format settings files."""

    format_name = "YAML"

    @classmethod
    def supported_extensions(cls) -> frozenset[str]:
        return frozenset({"yaml", "yml"})

    def parse(self, content: str, path: _pathlib.Path) -> _typing.Any:
        try:
            data = _yaml.safe_load(content)
        except _yaml.YAMLError as e:
            raise errors.ConfigParseError(
                path,
                f"YamlLoader: invalid YAML in '{path}': {e}",
                diagnostic=str(e),
            ) from e
        return {} if data is None else data
