"""
JSON settings file loader.

Duplicate keys in a JSON object resolve last-one-wins, as in the
standard json module. A file containing only whitespace is treated as
an empty object.
"""

from __future__ import annotations

import json as _json
import pathlib as _pathlib
import typing as _typing

import forced_settings.errors as errors
import forced_settings.loaders.base as base


class JsonLoader(base.TextConfigLoader):
    """Loader for JSON format settings files."""

    format_name = "JSON"

    @classmethod
    def supported_extensions(cls) -> frozenset[str]:
        return frozenset({"json"})

    def parse(self, content: str, path: _pathlib.Path) -> _typing.Any:
        if not content.strip():
            return {}
        try:
            return _json.loads(content)
        except _json.JSONDecodeError as e:
            diagnostic = f"{e.msg} (line {e.lineno}, column {e.colno})"
            raise errors.ConfigParseError(
                path,
                f"JsonLoader: JSON parsing error in '{path}': {diagnostic}",
                diagnostic=diagnostic,
            ) from e
