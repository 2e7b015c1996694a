"""
Settings file loaders.

Built-in loaders:
- JsonLoader (.json)
- YamlLoader (.yaml, .yml)

Custom loaders subclass ConfigLoader (or TextConfigLoader) and are either
registered in a LoaderRegistry or supplied per call through an override
table.
"""

from forced_settings.loaders.base import (
    ConfigLoader,
    SectionedMapping,
    TextConfigLoader,
    index_keyed,
    normalize_sections,
    tool_section,
)
from forced_settings.loaders.json_loader import JsonLoader
from forced_settings.loaders.registry import (
    BUILTIN_LOADERS,
    LoaderRegistry,
    create_default_registry,
    get_default_registry,
    is_loader_class,
    register_loader,
)
from forced_settings.loaders.yaml_loader import YamlLoader

__all__ = [
    "BUILTIN_LOADERS",
    "ConfigLoader",
    "JsonLoader",
    "LoaderRegistry",
    "SectionedMapping",
    "TextConfigLoader",
    "YamlLoader",
    "create_default_registry",
    "get_default_registry",
    "index_keyed",
    "is_loader_class",
    "normalize_sections",
    "register_loader",
    "tool_section",
]
