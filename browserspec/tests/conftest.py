# browserspec/tests/conftest.py
"""
Shared fixtures isolating the process-wide browserspec state between tests.
"""
import pytest

from browserspec import environment, factory
from browserspec.schemas import settings as settings_module
from browserspec.schemas.settings import Settings


def make_settings(**overrides) -> Settings:
    """Settings with every environment-dependent knob pinned to a known value."""
    values = {
        "browser": None,
        "headless": False,
        "remote_server_url": None,
        "use_remote": False,
        "public_server": False,
        "start_pause": 0,
        "unguarded": False,
        "skip_pending": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch):
    """Gives each test pristine settings, Implementation, server and info flag."""
    monkeypatch.setattr(settings_module, "_SETTINGS_CACHE", make_settings())
    monkeypatch.setattr(environment, "_IMPLEMENTATION", None)
    monkeypatch.setattr(environment, "_HTMLS", None)
    monkeypatch.setattr(environment, "_SERVER", None)
    monkeypatch.setattr(factory, "_DID_PRINT_BROWSER_INFO", False)


@pytest.fixture
def use_settings(monkeypatch):
    """Installs settings built from the given overrides as the cached settings."""

    def _use(**overrides) -> Settings:
        settings = make_settings(**overrides)
        monkeypatch.setattr(settings_module, "_SETTINGS_CACHE", settings)
        monkeypatch.setattr(environment, "_IMPLEMENTATION", None)
        monkeypatch.setattr(environment, "_HTMLS", None)
        monkeypatch.setattr(environment, "_SERVER", None)
        return settings

    return _use
