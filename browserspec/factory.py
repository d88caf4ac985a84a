# browserspec/factory.py
"""
Builds ready-to-use browsers from the active Implementation.
"""
import time
from typing import Any, Optional

import urllib3
from selenium.common.exceptions import WebDriverException

from browserspec.environment import get_implementation
from browserspec.schemas.settings import get_settings
from browserspec.utils.logger import setup_logger

logger = setup_logger(__name__)

_DID_PRINT_BROWSER_INFO = False


def new_browser(pause: Optional[float] = None) -> Any:
    """Launches a browser for the active Implementation.

    The constructor arguments are copied before use, the diagnostic line is
    logged once per process, and the window is maximized.

    :param pause: Seconds to sleep before launching; defaults to the `start_pause` setting.
    :type pause: Optional[float]
    :return: The browser instance, typically a Selenium WebDriver.
    :raises ConfigurationError: If the Implementation has no browser class.
    """
    if pause is None:
        pause = get_settings().start_pause
    if pause:
        time.sleep(pause)

    imp = get_implementation()
    klass = imp.resolve_browser_class()
    args, kwargs = imp.constructor_arguments()

    instance = klass(*args, **kwargs)
    print_browser_info_once(instance)
    try:
        instance.maximize_window()
    except Exception:
        close_browser(instance)
        raise

    return instance


def start_browser(url: str, pause: Optional[float] = None) -> Any:
    """Launches a browser and navigates it to `url`."""
    instance = new_browser(pause)
    instance.get(url)
    return instance


def close_browser(instance: Any) -> None:
    try:
        instance.quit()
    except (WebDriverException, urllib3.exceptions.HTTPError, ConnectionError) as e:
        logger.debug("Browser was already closed: %s", e)


def print_browser_info_once(instance: Any) -> None:
    global _DID_PRINT_BROWSER_INFO
    if _DID_PRINT_BROWSER_INFO:
        return

    _DID_PRINT_BROWSER_INFO = True

    try:
        imp = get_implementation()
        caps = instance.capabilities
        info = [
            type(instance).__name__,
            str(caps.get("browserName", "")),
            str(caps.get("browserVersion", "")),
            imp.driver_info,
        ]
        logger.warning(
            f"running browserspec against {' '.join(info)} using:\n{imp.inspect_args()}",
            extra={"id": "browser_info"},
        )
    except Exception as e:
        logger.warning(f"Unable to print browser info: {e}")


def reset_browser_info() -> None:
    global _DID_PRINT_BROWSER_INFO
    _DID_PRINT_BROWSER_INFO = False
