"""
Shared pytest fixtures for forced-settings tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import pytest as _pytest

import forced_settings.config as config
import forced_settings.constants as constants
import forced_settings.loaders.registry as registry
import forced_settings.merge as merge

FIXTURES_DIR = _pathlib.Path(__file__).parent / "fixtures"


@_pytest.fixture(autouse=True)
def clean_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove FORCED_SETTINGS_* variables so tests see defaults."""
    for key in list(_os.environ):
        if key.startswith(constants.ENV_PREFIX):
            monkeypatch.delenv(key)


@_pytest.fixture(autouse=True)
def reset_default_registry(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Give each test a fresh default loader registry."""
    monkeypatch.setattr(registry, "_default_registry", None)


@_pytest.fixture(autouse=True)
def drop_override_modules() -> _typing.Iterator[None]:
    """Forget modules imported from override loader files."""
    yield
    for name in list(_sys.modules):
        if name.startswith(constants.OVERRIDE_MODULE_PREFIX):
            del _sys.modules[name]


@_pytest.fixture
def fixtures_dir() -> _pathlib.Path:
    """Directory holding settings and loader fixture files."""
    return FIXTURES_DIR


@_pytest.fixture
def settings() -> config.Settings:
    """Strict settings with Moodle-style core section, rooted at the fixtures."""
    return config.Settings(strict=True, core_section="moodle", app_root=FIXTURES_DIR)


@_pytest.fixture
def core_settings() -> config.Settings:
    """Strict settings with the default core section."""
    return config.Settings(strict=True, app_root=FIXTURES_DIR)


@_pytest.fixture
def cfg() -> merge.HostConfig:
    """Empty host configuration object."""
    return merge.HostConfig()
