"""
Display helpers for loaded settings.

Used by the command line tool to render sectioned mappings and to flag
suspicious values.
"""

from __future__ import annotations

import json as _json
import typing as _typing

import yaml as _yaml


def format_yaml(data: _typing.Mapping[str, _typing.Any]) -> str:
    """Render settings as block-style YAML, keeping key order."""
    return _yaml.safe_dump(
        dict(data),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def format_json(data: _typing.Mapping[str, _typing.Any]) -> str:
    """Render settings as indented JSON."""
    return _json.dumps(data, indent=2, ensure_ascii=False, default=str)


def find_empty_values(data: _typing.Any, path: str = "") -> list[str]:
    """
    Recursively find empty string values.

    Args:
        data: Nested mapping or list to check.
        path: Dotted path prefix of ``data``.

    Returns:
        One warning per empty string, e.g. "Empty string value at: a.b".
        List elements are addressed by position ("a.0").
    """
    warnings: list[str] = []
    if isinstance(data, list):
        data = dict(enumerate(data))
    elif not isinstance(data, dict):
        return warnings

    for key, value in data.items():
        current = f"{path}.{key}" if path else str(key)
        if value == "":
            warnings.append(f"Empty string value at: {current}")
        elif isinstance(value, (dict, list)):
            warnings.extend(find_empty_values(value, current))
    return warnings
