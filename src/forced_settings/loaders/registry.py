"""
Registry of built-in loaders keyed by file extension.

Entries are either loader classes or lazy "module:ClassName" references,
imported on first use. The default registry knows the loaders shipped
with this package; host code may register more.
"""

from __future__ import annotations

import importlib as _importlib
import inspect as _inspect
import logging as _logging
import typing as _typing

import forced_settings.errors as errors
import forced_settings.loaders.base as base

_logger = _logging.getLogger(__name__)

LoaderClass = type[base.ConfigLoader]
LoaderRef = LoaderClass | str

BUILTIN_LOADERS: dict[str, str] = {
    "json": "forced_settings.loaders.json_loader:JsonLoader",
    "yaml": "forced_settings.loaders.yaml_loader:YamlLoader",
    "yml": "forced_settings.loaders.yaml_loader:YamlLoader",
}


def is_loader_class(obj: _typing.Any) -> bool:
    """Check if an object is a concrete ConfigLoader subclass."""
    return (
        isinstance(obj, type)
        and issubclass(obj, base.ConfigLoader)
        and not _inspect.isabstract(obj)
    )


class LoaderRegistry:
    """
    Maps file extensions to loader classes.

    Extensions are stored without a leading dot and compared exactly.
    """

    def __init__(self, loaders: _typing.Mapping[str, LoaderRef] | None = None) -> None:
        self._loaders: dict[str, LoaderRef] = {}
        for extension, loader in (loaders or {}).items():
            self.register(extension, loader)

    def register(self, extension: str, loader: LoaderRef, *, replace: bool = True) -> None:
        """
        Register a loader for an extension.

        Args:
            extension: File extension, with or without a leading dot.
            loader: Loader class or "module:ClassName" reference.
            replace: Whether an existing entry may be replaced.

        Raises:
            ValueError: If the extension is already registered and
                replace is False, or the reference is malformed.
        """
        extension = extension.lstrip(".")
        if not replace and extension in self._loaders:
            raise ValueError(f"Loader for extension '{extension}' is already registered")
        if isinstance(loader, str) and ":" not in loader:
            raise ValueError(f"Loader reference must be 'module:ClassName', got: {loader}")
        self._loaders[extension] = loader
        _logger.debug("Registered loader for .%s: %s", extension, loader)

    def unregister(self, extension: str) -> None:
        """Remove the loader for an extension, if any."""
        self._loaders.pop(extension.lstrip("."), None)

    def get(self, extension: str) -> LoaderClass:
        """
        Get the loader class for an extension.

        Args:
            extension: File extension without leading dot.

        Returns:
            The loader class.

        Raises:
            LoaderResolutionError: If no loader is registered, its module
                cannot be imported, or the class is missing or invalid.
        """
        loader = self._loaders.get(extension)
        if loader is None:
            raise errors.LoaderResolutionError(
                extension, f"No loader found for extension: {extension}"
            )
        if not isinstance(loader, str):
            return loader

        module_name, _, class_name = loader.partition(":")
        try:
            module = _importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            raise errors.LoaderResolutionError(
                extension,
                f"No loader found for extension: {extension}. "
                f"Expected module: {module_name}",
            ) from e

        loader_cls = getattr(module, class_name, None)
        if not is_loader_class(loader_cls):
            raise errors.LoaderResolutionError(
                extension,
                f"Loader class not found: {class_name} in module: {module_name}",
            )

        # Cache the import so later lookups skip it
        self._loaders[extension] = loader_cls
        return loader_cls  # type: ignore[return-value]

    def extensions(self) -> list[str]:
        """Sorted list of registered extensions."""
        return sorted(self._loaders)

    def __contains__(self, extension: str) -> bool:
        return extension in self._loaders

    def __len__(self) -> int:
        return len(self._loaders)


def create_default_registry() -> LoaderRegistry:
    """Create a new registry holding only the built-in loaders."""
    return LoaderRegistry(BUILTIN_LOADERS)


# Global default registry
_default_registry: LoaderRegistry | None = None


def get_default_registry() -> LoaderRegistry:
    """
    Get the process-wide loader registry.

    Lazily initialized with the built-in loaders.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_registry()
    return _default_registry


def register_loader(extension: str, loader: LoaderRef) -> None:
    """Register a loader in the default registry."""
    get_default_registry().register(extension, loader)
