# browserspec/selector.py
"""
Resolves which browser implementation to instantiate from settings.

`LocalConfig` drives a browser on this machine, `RemoteConfig` drives one on
a Selenium grid. `build_implementation()` picks between them.
"""
from typing import Any, Dict

import selenium
from selenium import webdriver

from browserspec.exceptions import ConfigurationError
from browserspec.implementation import Implementation
from browserspec.schemas.settings import Settings
from browserspec.utils.logger import setup_logger

logger = setup_logger(__name__)

LOCAL_DRIVERS = {
    "chrome": webdriver.Chrome,
    "firefox": webdriver.Firefox,
    "edge": webdriver.Edge,
    "safari": webdriver.Safari,
}


class LocalConfig:
    """Configures an Implementation for a locally launched browser."""

    def __init__(self, imp: Implementation, settings: Settings):
        self.imp = imp
        self.settings = settings

    @property
    def browser(self) -> str:
        name = self.settings.browser
        if name not in LOCAL_DRIVERS:
            raise ConfigurationError(
                f"unknown browser {name!r}; expected one of {sorted(LOCAL_DRIVERS)}"
            )
        return name

    def configure(self) -> Implementation:
        self.imp.name = "webdriver"
        self.imp.browser_name = self.browser
        self.imp.headless = self.settings.headless
        self.imp.remote = False
        self.set_webdriver()
        self.imp.browser_args = []
        self.imp.browser_kwargs = self.browser_kwargs()
        self.imp.driver_info = self.driver_info()
        logger.debug(
            "Configured implementation",
            extra={"browser": self.imp.browser_name, "remote": self.imp.remote},
        )
        return self.imp

    def set_webdriver(self) -> None:
        self.imp.browser_class = LOCAL_DRIVERS[self.browser]

    def driver_info(self) -> str:
        return f"selenium {selenium.__version__} local {self.browser} driver"

    def browser_kwargs(self) -> Dict[str, Any]:
        return {"options": self.options()}

    def options(self):
        builder = getattr(self, f"_{self.browser}_options")
        return builder()

    def _chrome_options(self):
        options = webdriver.ChromeOptions()
        self._chromium_arguments(options)
        return options

    def _edge_options(self):
        options = webdriver.EdgeOptions()
        self._chromium_arguments(options)
        return options

    def _chromium_arguments(self, options) -> None:
        options.add_argument("--disable-translate")
        if self.settings.headless:
            options.add_argument("--headless=new")
        if self.settings.chrome_binary:
            options.binary_location = self.settings.chrome_binary

    def _firefox_options(self):
        options = webdriver.FirefoxOptions()
        if self.settings.headless:
            options.add_argument("-headless")
        if self.settings.firefox_binary:
            options.binary_location = self.settings.firefox_binary
        return options

    def _safari_options(self):
        options = webdriver.SafariOptions()
        if self.settings.safari_preview:
            options.use_technology_preview = True
        return options


class RemoteConfig(LocalConfig):
    """Configures an Implementation that talks to a Selenium grid."""

    @property
    def url(self) -> str:
        if not self.settings.remote_server_url:
            raise ConfigurationError(
                "remote run requested but BROWSERSPEC_REMOTE_SERVER_URL is not set"
            )
        return self.settings.remote_server_url

    def configure(self) -> Implementation:
        super().configure()
        self.imp.remote = True
        return self.imp

    def set_webdriver(self) -> None:
        self.imp.browser_class = webdriver.Remote

    def driver_info(self) -> str:
        return f"selenium {selenium.__version__} remote {self.browser} driver at {self.url}"

    def browser_kwargs(self) -> Dict[str, Any]:
        return {"command_executor": self.url, "options": self.options()}


def is_remote(settings: Settings) -> bool:
    return bool(settings.remote_server_url) or settings.use_remote


def build_implementation(settings: Settings) -> Implementation:
    """Builds the Implementation described by the given settings.

    With no browser configured, an Implementation without a browser class is
    returned; browser examples are skipped for it.

    :param settings: Resolved browserspec settings.
    :type settings: Settings
    :return: A configured Implementation.
    :rtype: Implementation
    :raises ConfigurationError: If the browser is unknown or a remote run lacks a URL.
    """
    if settings.use_remote and not settings.remote_server_url:
        raise ConfigurationError(
            "remote run requested but BROWSERSPEC_REMOTE_SERVER_URL is not set"
        )
    imp = Implementation(headless=settings.headless, remote=is_remote(settings))
    if settings.browser is None:
        logger.info("No browser configured; browser examples will be skipped")
        return imp
    config_cls = RemoteConfig if is_remote(settings) else LocalConfig
    return config_cls(imp, settings).configure()
