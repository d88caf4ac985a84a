# browserspec/tests/test_factory.py
"""
Unit tests for the browser factory, using a fake browser class.
"""
import logging
from unittest.mock import MagicMock

import pytest
from selenium.common.exceptions import InvalidSessionIdException, WebDriverException

from browserspec import environment, factory
from browserspec.exceptions import ConfigurationError
from browserspec.implementation import Implementation


class FakeBrowser:
    """Records how it was built and what was done to it."""

    instances = []

    def __init__(self, *args, **kwargs):
        self.args = args
        self.kwargs = kwargs
        self.capabilities = {"browserName": "fakebrowser", "browserVersion": "1.2.3"}
        self.calls = []
        FakeBrowser.instances.append(self)

    def maximize_window(self):
        self.calls.append("maximize_window")

    def get(self, url):
        self.calls.append(("get", url))

    def quit(self):
        self.calls.append("quit")


@pytest.fixture
def fake_imp():
    FakeBrowser.instances = []
    imp = Implementation(
        browser_name="chrome",
        browser_class=FakeBrowser,
        browser_args=["positional"],
        browser_kwargs={"prefs": {"homepage": "about:blank"}},
        driver_info="fake driver",
    )
    environment.set_implementation(imp)
    return imp


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr(factory.time, "sleep", calls.append)
    return calls


def test_new_browser_builds_and_maximizes(fake_imp, sleeps):
    browser = factory.new_browser(pause=0)

    assert isinstance(browser, FakeBrowser)
    assert browser.args == ("positional",)
    assert browser.kwargs == {"prefs": {"homepage": "about:blank"}}
    assert browser.calls == ["maximize_window"]
    assert sleeps == []


def test_new_browser_pauses_before_launch(fake_imp, sleeps):
    factory.new_browser(pause=2.5)
    assert sleeps == [2.5]


def test_new_browser_defaults_pause_to_setting(fake_imp, sleeps, use_settings):
    use_settings(start_pause=1.5)
    environment.set_implementation(fake_imp)
    factory.new_browser()
    assert sleeps == [1.5]


def test_new_browser_duplicates_mutable_arguments(fake_imp, sleeps):
    first = factory.new_browser(pause=0)
    first.kwargs["prefs"]["homepage"] = "http://contaminated.test"

    second = factory.new_browser(pause=0)

    assert second.kwargs["prefs"] == {"homepage": "about:blank"}
    assert fake_imp.browser_kwargs["prefs"] == {"homepage": "about:blank"}


def test_new_browser_without_class_raises(sleeps):
    environment.set_implementation(Implementation())
    with pytest.raises(ConfigurationError):
        factory.new_browser(pause=0)


def test_driver_errors_propagate(fake_imp, sleeps):
    fake_imp.browser_class = MagicMock(side_effect=RuntimeError("driver exploded"))
    with pytest.raises(RuntimeError, match="driver exploded"):
        factory.new_browser(pause=0)


def test_browser_info_is_logged_once(fake_imp, sleeps, caplog):
    with caplog.at_level(logging.WARNING):
        factory.new_browser(pause=0)
        factory.new_browser(pause=0)

    messages = [r.getMessage() for r in caplog.records if "running browserspec against" in r.getMessage()]
    assert len(messages) == 1
    assert "FakeBrowser fakebrowser 1.2.3 fake driver" in messages[0]
    assert "prefs: {'homepage': 'about:blank'}" in messages[0]


def test_browser_info_failure_is_logged_not_raised(fake_imp, sleeps, caplog):
    class NoCapabilities(FakeBrowser):
        @property
        def capabilities(self):
            raise RuntimeError("session not ready")

        @capabilities.setter
        def capabilities(self, value):
            pass

    fake_imp.browser_class = NoCapabilities

    with caplog.at_level(logging.WARNING):
        browser = factory.new_browser(pause=0)

    assert browser.calls == ["maximize_window"]
    assert any(
        "Unable to print browser info: session not ready" in r.getMessage()
        for r in caplog.records
    )


def test_reset_browser_info(fake_imp, sleeps, caplog):
    with caplog.at_level(logging.WARNING):
        factory.new_browser(pause=0)
        factory.reset_browser_info()
        factory.new_browser(pause=0)
    messages = [r for r in caplog.records if "running browserspec against" in r.getMessage()]
    assert len(messages) == 2


def test_start_browser_navigates(fake_imp, sleeps):
    browser = factory.start_browser("http://127.0.0.1:1/tables.html", pause=0)
    assert browser.calls == ["maximize_window", ("get", "http://127.0.0.1:1/tables.html")]


def test_close_browser_quits():
    browser = FakeBrowser()
    factory.close_browser(browser)
    assert browser.calls == ["quit"]


def test_close_browser_tolerates_closed_session():
    browser = MagicMock()
    browser.quit.side_effect = InvalidSessionIdException("session deleted")
    factory.close_browser(browser)
    browser.quit.assert_called_once()


def test_browser_is_quit_when_maximizing_fails(fake_imp, sleeps):
    class NoMaximize(FakeBrowser):
        def maximize_window(self):
            raise WebDriverException("window manager refused")

    fake_imp.browser_class = NoMaximize

    with pytest.raises(WebDriverException, match="window manager refused"):
        factory.new_browser(pause=0)

    assert FakeBrowser.instances[-1].calls == ["quit"]
