# browserspec/tests/test_implementation.py
"""
Unit tests for the Implementation model.
"""
from types import SimpleNamespace

import pytest
from selenium import webdriver

from browserspec.exceptions import ConfigurationError, GuardError
from browserspec.implementation import Implementation, detect_platform


@pytest.fixture
def chrome_imp():
    options = webdriver.ChromeOptions()
    options.add_argument("--disable-translate")
    return Implementation(
        browser_name="chrome",
        browser_class=webdriver.Chrome,
        browser_kwargs={"options": options, "prefs": {"download": "/tmp"}},
        driver_info="test driver",
        platform="linux",
        headless=True,
        remote=False,
    )


def test_detect_platform_returns_guard_name(monkeypatch):
    monkeypatch.setattr("browserspec.implementation._platform.system", lambda: "Darwin")
    assert detect_platform() == "mac"
    monkeypatch.setattr("browserspec.implementation._platform.system", lambda: "Plan9")
    assert detect_platform() == "plan9"


def test_resolve_browser_class_without_class_raises():
    with pytest.raises(ConfigurationError, match="no browser class"):
        Implementation().resolve_browser_class()


def test_guard_conditions(chrome_imp):
    assert chrome_imp.guard_conditions() == {
        "browser": "chrome",
        "platform": "linux",
        "headless": True,
        "remote": False,
    }


@pytest.mark.parametrize(
    "conditions, expected",
    [
        ({}, True),
        ({"browser": "chrome"}, True),
        ({"browser": "Chrome"}, True),
        ({"browser": "firefox"}, False),
        ({"browser": ["firefox", "chrome"]}, True),
        ({"browser": "chrome", "headless": True}, True),
        ({"browser": "chrome", "headless": False}, False),
        ({"platform": ["mac", "windows"]}, False),
        ({"remote": False, "platform": "linux"}, True),
    ],
)
def test_matches_guard(chrome_imp, conditions, expected):
    assert chrome_imp.matches_guard(conditions) is expected


def test_matches_guard_unknown_key_raises(chrome_imp):
    with pytest.raises(GuardError, match="unknown guard condition 'driver'"):
        chrome_imp.matches_guard({"driver": "chromedriver"})


def test_matching_guards_in(chrome_imp):
    always = SimpleNamespace(conditions={})
    chrome = SimpleNamespace(conditions={"browser": "chrome"})
    firefox = SimpleNamespace(conditions={"browser": "firefox"})
    assert chrome_imp.matching_guards_in([always, chrome, firefox]) == [always, chrome]


def test_capability_name():
    assert Implementation(browser_name="edge").capability_name == "msedge"
    assert Implementation(browser_name="firefox").capability_name == "firefox"
    assert Implementation().capability_name is None


def test_inspect_args_renders_options_as_capabilities(chrome_imp):
    text = chrome_imp.inspect_args()
    assert "options: {" in text
    assert "--disable-translate" in text
    assert "prefs: {'download': '/tmp'}" in text


def test_inspect_args_without_arguments():
    assert Implementation().inspect_args() == "  (no arguments)"


def test_constructor_arguments_are_copies(chrome_imp):
    args, kwargs = chrome_imp.constructor_arguments()
    kwargs["prefs"]["download"] = "/elsewhere"
    kwargs["options"].add_argument("--headless=new")

    assert chrome_imp.browser_kwargs["prefs"] == {"download": "/tmp"}
    assert "--headless=new" not in chrome_imp.browser_kwargs["options"].arguments
    assert kwargs["options"] is not chrome_imp.browser_kwargs["options"]


def test_constructor_arguments_keep_immutable_values(chrome_imp):
    service = object()
    chrome_imp.browser_args = ["positional", service]
    args, _ = chrome_imp.constructor_arguments()
    assert args[0] == "positional"
    assert args[1] is service


def test_clone_is_independent(chrome_imp):
    clone = chrome_imp.clone()
    clone.browser_kwargs["prefs"]["download"] = "/changed"
    clone.browser_name = "firefox"

    assert chrome_imp.browser_kwargs["prefs"]["download"] == "/tmp"
    assert chrome_imp.browser_name == "chrome"
