"""
Tests for loader resolution.

Tests verify that:
- Extensions are extracted from file names
- Override loader files take precedence over registered loaders
- Override files are searched for a loader class explicitly
- Failures are reported with the right error type
"""

import pathlib as _pathlib

import pytest as _pytest

import forced_settings.config as config
import forced_settings.errors as errors
import forced_settings.loaders.json_loader as json_loader
import forced_settings.loaders.registry as registry
import forced_settings.resolver as resolver


class TestGetExtension:
    """Tests for get_extension."""

    @_pytest.mark.parametrize(
        ("filepath", "expected"),
        [
            ("settings.json", "json"),
            ("/srv/app/.moodle_settings.json", "json"),
            ("archive.tar.gz", "gz"),
            (".env", "env"),
            ("Makefile", ""),
            ("/etc/some.dir/noext", ""),
            ("trailing.", ""),
        ],
    )
    def test_extension(self, filepath: str, expected: str) -> None:
        """Extension is the text after the final dot of the file name."""
        assert resolver.get_extension(filepath) == expected


class TestLoadLoaderModule:
    """Tests for load_loader_module."""

    def test_loads_valid_module(self, fixtures_dir: _pathlib.Path) -> None:
        """Valid Python module is loaded."""
        module = resolver.load_loader_module(fixtures_dir / "custom_loader.py", "custom")
        assert hasattr(module, "CustomLoader")

    def test_missing_file(self, tmp_path: _pathlib.Path) -> None:
        """Missing file raises ConfigNotFoundError."""
        with _pytest.raises(errors.ConfigNotFoundError, match="Loader file not found"):
            resolver.load_loader_module(tmp_path / "nope.py", "xyz")

    def test_non_py_file(self, fixtures_dir: _pathlib.Path) -> None:
        """Non-.py file is a resolution error."""
        with _pytest.raises(errors.LoaderResolutionError, match=r"must be \.py"):
            resolver.load_loader_module(fixtures_dir / "unsupported.xyz", "xyz")

    def test_syntax_error(self, tmp_path: _pathlib.Path) -> None:
        """Python syntax error is a resolution error."""
        loader_file = tmp_path / "broken.py"
        loader_file.write_text("def broken(:\n    pass")
        with _pytest.raises(errors.LoaderResolutionError, match="Failed to load"):
            resolver.load_loader_module(loader_file, "x")


class TestGetLoaderClassFromModule:
    """Tests for get_loader_class_from_module."""

    def test_prefers_well_known_name(self, tmp_path: _pathlib.Path) -> None:
        """A class named Loader wins over earlier definitions."""
        loader_file = tmp_path / "two.py"
        loader_file.write_text(
            """
import forced_settings.loaders.base as base

class First(base.ConfigLoader):
    def load(self, filepath):
        return {}

class Loader(base.ConfigLoader):
    def load(self, filepath):
        return {}
"""
        )
        module = resolver.load_loader_module(loader_file, "two")
        assert resolver.get_loader_class_from_module(module) is module.Loader

    def test_first_defined_wins(
        self,
        tmp_path: _pathlib.Path,
        caplog: _pytest.LogCaptureFixture,
    ) -> None:
        """Without Loader, the first defined subclass is used and a warning logged."""
        loader_file = tmp_path / "many.py"
        loader_file.write_text(
            """
import forced_settings.loaders.base as base

class Zeta(base.ConfigLoader):
    def load(self, filepath):
        return {}

class Alpha(base.ConfigLoader):
    def load(self, filepath):
        return {}
"""
        )
        module = resolver.load_loader_module(loader_file, "many")
        with caplog.at_level("WARNING"):
            assert resolver.get_loader_class_from_module(module) is module.Zeta
        assert "defines 2 loader classes" in caplog.text

    def test_ignores_imported_loaders(self, tmp_path: _pathlib.Path) -> None:
        """Loaders imported into the file are not candidates."""
        loader_file = tmp_path / "imports_only.py"
        loader_file.write_text(
            "import forced_settings.loaders.json_loader as jl\n"
            "JsonLoader = jl.JsonLoader\n"
        )
        module = resolver.load_loader_module(loader_file, "x")
        assert resolver.get_loader_class_from_module(module) is None

    def test_skips_helpers_and_abstract(self, fixtures_dir: _pathlib.Path) -> None:
        """Helper classes are skipped."""
        module = resolver.load_loader_module(fixtures_dir / "custom_loader.py", "custom")
        assert resolver.get_loader_class_from_module(module) is module.CustomLoader


class TestLoaderResolver:
    """Tests for LoaderResolver.resolve()."""

    def test_builtin_json(self, settings: config.Settings) -> None:
        """JSON files use the built-in loader."""
        loader = resolver.LoaderResolver(settings).resolve("/any/where/settings.json")
        assert isinstance(loader, json_loader.JsonLoader)
        assert loader.strict is True
        assert loader.core_section == "moodle"

    def test_strict_argument_overrides_settings(self, settings: config.Settings) -> None:
        """Explicit strict flag beats settings.strict."""
        loader = resolver.LoaderResolver(settings, strict=False).resolve("x.json")
        assert loader.strict is False

    def test_override_takes_precedence(self, settings: config.Settings) -> None:
        """Override for json replaces the built-in loader."""
        loader = resolver.LoaderResolver(settings).resolve(
            "x.json", {"json": "custom_loader.py"}
        )
        assert type(loader).__name__ == "CustomLoader"

    def test_relative_override_uses_app_root(
        self,
        settings: config.Settings,
        fixtures_dir: _pathlib.Path,
    ) -> None:
        """Relative loader paths resolve against app_root."""
        loader_cls = resolver.LoaderResolver(settings).resolve_class(
            "test_config.custom", {"custom": "custom_loader.py"}
        )
        assert loader_cls.__name__ == "CustomLoader"
        absolute = resolver.LoaderResolver(settings).resolve_class(
            "test_config.custom", {"custom": str(fixtures_dir / "custom_loader.py")}
        )
        assert absolute.__name__ == "CustomLoader"

    def test_override_for_other_extension_ignored(self, settings: config.Settings) -> None:
        """Overrides only apply to their own extension."""
        loader = resolver.LoaderResolver(settings).resolve(
            "x.json", {"custom": "custom_loader.py"}
        )
        assert isinstance(loader, json_loader.JsonLoader)

    def test_missing_override_file(self, settings: config.Settings) -> None:
        """Missing override file raises ConfigNotFoundError."""
        with _pytest.raises(errors.ConfigNotFoundError) as exc_info:
            resolver.LoaderResolver(settings).resolve(
                "unsupported.xyz", {"xyz": "/nonexistent/loader.py"}
            )
        assert "Loader file not found" in str(exc_info.value)
        assert "extension: xyz" in str(exc_info.value)

    def test_override_without_loader_class(self, settings: config.Settings) -> None:
        """Override file with no ConfigLoader subclass is a resolution error."""
        with _pytest.raises(
            errors.LoaderResolutionError,
            match="No valid ConfigLoader implementation found",
        ):
            resolver.LoaderResolver(settings).resolve("a.custom", {"custom": "not_a_loader.py"})

    def test_unknown_extension(self, settings: config.Settings) -> None:
        """Unknown extension raises naming it."""
        with _pytest.raises(errors.LoaderResolutionError) as exc_info:
            resolver.LoaderResolver(settings).resolve("unsupported.xyz")
        assert "No loader found for extension: xyz" in str(exc_info.value)

    def test_custom_registry(self, settings: config.Settings) -> None:
        """A caller-supplied registry replaces the default one."""
        reg = registry.LoaderRegistry()
        with _pytest.raises(errors.LoaderResolutionError):
            resolver.LoaderResolver(settings, reg).resolve("x.json")

    def test_default_settings_from_environment(
        self,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        """Without settings, environment variables are used."""
        monkeypatch.setenv("FORCED_SETTINGS_STRICT", "true")
        monkeypatch.setenv("FORCED_SETTINGS_CORE_SECTION", "site")
        loader = resolver.LoaderResolver().resolve("x.yaml")
        assert loader.strict is True
        assert loader.core_section == "site"
