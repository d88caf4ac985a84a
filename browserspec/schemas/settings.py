# browserspec/schemas/settings.py
"""
Centralized settings management using pydantic-settings.

This module defines a Settings model that loads configuration values from
explicit overrides, environment variables, a `.env` file and an optional
`browserspec.yaml` file, in that order of precedence. It is the single source
of truth for which browser to drive, how the fixture server binds, and how
guards behave.
"""
from typing import List, Optional, Tuple, Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

PUBLIC_SERVER_URL = "http://watir.com/examples"


class Settings(BaseSettings):
    """
    Loads all browserspec knobs into a structured Pydantic model.

    Every field can be set through an environment variable prefixed with
    `BROWSERSPEC_` (e.g. `BROWSERSPEC_BROWSER=firefox`).

    :ivar browser: Browser to drive (chrome, firefox, edge, safari). None disables browser examples.
    :vartype browser: Optional[str]
    :ivar headless: Launch the browser without a visible window.
    :vartype headless: bool
    :ivar remote_server_url: URL of a running Selenium grid; implies a remote run.
    :vartype remote_server_url: Optional[str]
    :ivar use_remote: Request a remote run; requires `remote_server_url`.
    :vartype use_remote: bool
    :ivar public_server: Use the public example server instead of the local fixture server.
    :vartype public_server: bool
    :ivar server_bind: Address the fixture server binds to.
    :vartype server_bind: str
    :ivar server_port: Port of the fixture server; 0 picks a free port.
    :vartype server_port: int
    :ivar start_pause: Seconds to sleep before each browser launch.
    :vartype start_pause: float
    :ivar unguarded: Ignore every guard marker and run all examples.
    :vartype unguarded: bool
    :ivar skip_pending: Skip examples that guards mark as expected to fail.
    :vartype skip_pending: bool
    """

    browser: Optional[str] = None
    headless: bool = False
    remote_server_url: Optional[str] = None
    use_remote: bool = False

    public_server: bool = False
    public_server_url: str = PUBLIC_SERVER_URL
    server_bind: str = "127.0.0.1"
    server_port: int = Field(0, ge=0, le=65535)
    html_dirs: List[str] = Field(default_factory=list)

    start_pause: float = Field(1.0, ge=0)
    unguarded: bool = False
    skip_pending: bool = False

    chrome_binary: Optional[str] = None
    firefox_binary: Optional[str] = None
    safari_preview: bool = False

    log_level: str = "info"

    model_config = SettingsConfigDict(
        env_prefix="BROWSERSPEC_",
        env_file=".env",
        env_file_encoding="utf-8",
        yaml_file="browserspec.yaml",
        extra="ignore",
    )

    @field_validator("browser")
    @classmethod
    def _normalize_browser(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().lower()
        return value or None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
        )


_SETTINGS_CACHE: Optional[Settings] = None


def get_settings() -> Settings:
    """Returns the cached settings, building them on first access."""
    global _SETTINGS_CACHE
    if _SETTINGS_CACHE is None:
        _SETTINGS_CACHE = Settings()
    return _SETTINGS_CACHE


def reload_settings(**overrides) -> Settings:
    """Clear cache and rebuild, applying explicit overrides on top of every source.

    Overrides whose value is None are ignored so callers can pass optional
    command-line values straight through.
    """
    global _SETTINGS_CACHE
    applied = {key: value for key, value in overrides.items() if value is not None}
    _SETTINGS_CACHE = Settings(**applied)
    return _SETTINGS_CACHE
