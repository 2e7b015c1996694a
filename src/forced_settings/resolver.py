"""
Loader resolution for settings files.

The loader for a file is chosen by its extension:
1. An entry in the caller's override table (extension -> loader file)
2. Otherwise the loader registered for that extension

Override loader files are plain Python files defining a ConfigLoader
subclass. A class named ``Loader`` is preferred; otherwise the first
concrete ConfigLoader subclass defined in the file is used.
"""

from __future__ import annotations

import importlib.util as _importlib_util
import logging as _logging
import os as _os
import pathlib as _pathlib
import re as _re
import sys as _sys
import typing as _typing

import forced_settings.config as config
import forced_settings.constants as constants
import forced_settings.errors as errors
import forced_settings.loaders.base as base
import forced_settings.loaders.registry as registry

_logger = _logging.getLogger(__name__)

# Extension -> path of a Python file defining a loader
OverrideTable = _typing.Mapping[str, "str | _os.PathLike[str]"]

WELL_KNOWN_LOADER_NAME = "Loader"


def get_extension(filepath: str | _os.PathLike[str]) -> str:
    """
    Get the extension of a file path.

    The extension is everything after the final dot of the file name,
    so ``.settings.json`` gives ``json`` and ``.env`` gives ``env``.

    Returns:
        The extension without the dot, or an empty string.
    """
    name = _pathlib.Path(filepath).name
    _, dot, extension = name.rpartition(".")
    return extension if dot else ""


def load_loader_module(loader_path: _pathlib.Path, extension: str) -> _typing.Any:
    """
    Dynamically load a Python module from a file path.

    Args:
        loader_path: Absolute path to the .py file.
        extension: Extension being resolved (for module naming and errors).

    Returns:
        The loaded module.

    Raises:
        ConfigNotFoundError: If the file does not exist.
        LoaderResolutionError: If the file is not .py or fails to import.
    """
    if not loader_path.is_file():
        raise errors.ConfigNotFoundError(
            loader_path,
            f"Loader file not found: {loader_path} for extension: {extension}",
        )

    if loader_path.suffix != ".py":
        raise errors.LoaderResolutionError(
            extension, f"Loader file must be .py: {loader_path}"
        )

    safe_ext = _re.sub(r"\W", "_", extension) or "noext"
    module_name = f"{constants.OVERRIDE_MODULE_PREFIX}.{safe_ext}.{loader_path.stem}"

    try:
        spec = _importlib_util.spec_from_file_location(module_name, loader_path)
        if spec is None or spec.loader is None:
            raise errors.LoaderResolutionError(
                extension, f"Cannot load module spec for: {loader_path}"
            )

        module = _importlib_util.module_from_spec(spec)
        _sys.modules[module_name] = module
        spec.loader.exec_module(module)

        return module
    except errors.LoaderResolutionError:
        raise
    except Exception as e:
        _sys.modules.pop(module_name, None)
        raise errors.LoaderResolutionError(
            extension, f"Failed to load loader file {loader_path}: {e}"
        ) from e


def get_loader_class_from_module(module: _typing.Any) -> registry.LoaderClass | None:
    """
    Find the loader class in a loaded override module.

    Looks for:
    1. A class named 'Loader' that is a concrete ConfigLoader
    2. Otherwise the first concrete ConfigLoader subclass defined in
       the module, in definition order

    Classes imported into the module (such as the built-in loaders) are
    not candidates.

    Returns:
        The loader class, or None if not found.
    """
    well_known = getattr(module, WELL_KNOWN_LOADER_NAME, None)
    if registry.is_loader_class(well_known):
        return well_known  # type: ignore[no-any-return]

    candidates = [
        obj
        for attr_name, obj in vars(module).items()
        if not attr_name.startswith("_")
        and registry.is_loader_class(obj)
        and obj.__module__ == module.__name__
    ]
    if not candidates:
        return None

    if len(candidates) > 1:
        _logger.warning(
            "Loader file %s defines %d loader classes (%s); using %s",
            getattr(module, "__file__", module.__name__),
            len(candidates),
            ", ".join(c.__name__ for c in candidates),
            candidates[0].__name__,
        )
    return candidates[0]  # type: ignore[no-any-return]


class LoaderResolver:
    """
    Chooses and instantiates the loader for a settings file.

    Not thread-safe: override files are imported into sys.modules.
    """

    def __init__(
        self,
        settings: config.Settings | None = None,
        loader_registry: registry.LoaderRegistry | None = None,
        *,
        strict: bool | None = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            settings: Tool settings (app root, core section, strict mode).
            loader_registry: Registry of built-in loaders (default: global).
            strict: Overrides settings.strict when given.
        """
        self._settings = settings if settings is not None else config.Settings()
        self._registry = (
            loader_registry if loader_registry is not None else registry.get_default_registry()
        )
        self._strict = self._settings.strict if strict is None else strict

    @property
    def strict(self) -> bool:
        return self._strict

    def resolve_class(
        self,
        filepath: str | _os.PathLike[str],
        overrides: OverrideTable | None = None,
    ) -> registry.LoaderClass:
        """
        Find the loader class for a file without instantiating it.

        Raises:
            ConfigNotFoundError: If an override loader file does not exist.
            LoaderResolutionError: If no usable loader class is found.
        """
        extension = get_extension(filepath)

        if overrides and extension in overrides:
            return self._load_override(overrides[extension], extension)

        loader_cls = self._registry.get(extension)
        _logger.debug("Using registered loader %s for .%s", loader_cls.__name__, extension)
        return loader_cls

    def resolve(
        self,
        filepath: str | _os.PathLike[str],
        overrides: OverrideTable | None = None,
    ) -> base.ConfigLoader:
        """
        Get a loader instance for a file.

        Args:
            filepath: Settings file path.
            overrides: Optional extension -> loader file table; entries
                take precedence over registered loaders.

        Returns:
            Loader instance configured with strict mode and core section.
        """
        loader_cls = self.resolve_class(filepath, overrides)
        return loader_cls(strict=self._strict, core_section=self._settings.core_section)

    def _load_override(
        self,
        loader_file: str | _os.PathLike[str],
        extension: str,
    ) -> registry.LoaderClass:
        loader_path = self._settings.resolve_app_path(loader_file)
        module = load_loader_module(loader_path, extension)

        loader_cls = get_loader_class_from_module(module)
        if loader_cls is None:
            raise errors.LoaderResolutionError(
                extension,
                f"No valid ConfigLoader implementation found in: {loader_path}",
            )

        _logger.debug("Using override loader %s from %s", loader_cls.__name__, loader_path)
        return loader_cls
