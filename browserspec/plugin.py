# browserspec/plugin.py
"""
pytest plugin wiring browserspec into a test run.

It resolves settings from command-line options, applies guard markers at
collection time, manages the fixture server for the session and hands each
example a freshly launched browser.
"""
import pytest

from browserspec import environment
from browserspec.exceptions import ConfigurationError, GuardError
from browserspec.factory import close_browser, new_browser
from browserspec.guards import (
    GUARD_TYPES,
    PENDING,
    SKIP,
    disposition,
    guards_from_marker,
    registry,
)
from browserspec.runner import find_support_modules
from browserspec.schemas.settings import get_settings, reload_settings
from browserspec.utils.log_sinks import example_id_context
from browserspec.utils.logger import setup_logger

logger = setup_logger(__name__)

_MARKERS = {
    "except_on": "except_on(**conditions, reason=None): expected to fail where the conditions match",
    "only": "only(**conditions, reason=None): expected to fail where the conditions do not match",
    "exclude": "exclude(**conditions, reason=None): skipped where the conditions match",
    "exclusive": "exclusive(**conditions, reason=None): skipped where the conditions do not match",
    "flaky_on": "flaky_on(**conditions, reason=None): skipped where the conditions match",
}


def pytest_addoption(parser):
    group = parser.getgroup("browserspec", "browser specs")
    group.addoption(
        "--spec-browser",
        default=None,
        help="browser to drive: chrome, firefox, edge or safari (env: BROWSERSPEC_BROWSER)",
    )
    group.addoption(
        "--spec-headless",
        action="store_true",
        default=None,
        help="launch the browser headless (env: BROWSERSPEC_HEADLESS)",
    )
    group.addoption(
        "--spec-remote-url",
        default=None,
        help="URL of a running Selenium grid (env: BROWSERSPEC_REMOTE_SERVER_URL)",
    )
    group.addoption(
        "--spec-public-server",
        action="store_true",
        default=None,
        help="navigate to the public example server instead of the local fixture server",
    )
    group.addoption(
        "--unguarded",
        action="store_true",
        default=None,
        help="ignore guard markers and run every example",
    )
    group.addoption(
        "--guards-report",
        action="store_true",
        default=False,
        help="list the guards matching the active implementation after the run",
    )


def pytest_configure(config):
    for text in _MARKERS.values():
        config.addinivalue_line("markers", text)

    reload_settings(
        browser=config.getoption("spec_browser"),
        headless=config.getoption("spec_headless"),
        remote_server_url=config.getoption("spec_remote_url"),
        public_server=config.getoption("spec_public_server"),
        unguarded=config.getoption("unguarded"),
    )
    environment.reset()
    registry.clear()

    try:
        environment.get_implementation()
    except ConfigurationError as e:
        raise pytest.UsageError(str(e)) from e

    for name in find_support_modules():
        config.pluginmanager.import_plugin(name)


def pytest_unconfigure(config):
    environment.reset()


def pytest_collection_modifyitems(session, config, items):
    settings = get_settings()
    imp = environment.get_implementation()
    for item in items:
        guards = []
        for kind in GUARD_TYPES:
            for marker in item.iter_markers(name=kind):
                try:
                    guards.extend(
                        guards_from_marker(kind, marker.args, marker.kwargs, item.nodeid)
                    )
                except GuardError as e:
                    raise pytest.UsageError(f"{item.nodeid}: {e}") from e
        if not guards:
            continue
        registry.record(guards)
        if settings.unguarded:
            continue

        result = disposition(guards, imp, skip_pending=settings.skip_pending)
        if result.action == SKIP:
            item.add_marker(pytest.mark.skip(reason=result.message))
        elif result.action == PENDING:
            item.add_marker(pytest.mark.xfail(reason=result.message, strict=True))


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_protocol(item, nextitem):
    token = example_id_context.set(item.nodeid)
    try:
        yield
    finally:
        example_id_context.reset(token)


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    if not config.getoption("guards_report"):
        return
    terminalreporter.write_sep("-", "browserspec guards")
    terminalreporter.write_line(registry.report(environment.get_implementation()))


@pytest.fixture(scope="session")
def spec_server():
    """The running fixture server, or None when the public server is used."""
    if environment.uses_public_server():
        yield None
        return
    server = environment.get_server()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def implementation():
    return environment.get_implementation()


@pytest.fixture
def original_implementation():
    """Snapshot of the Implementation, restored after the example reconfigures it."""
    original = environment.get_implementation().clone()
    yield original
    environment.set_implementation(original.clone())


@pytest.fixture(name="url_for")
def url_for_fixture(request):
    """`environment.url_for`, with the fixture server running when it is needed."""
    if not environment.uses_public_server():
        request.getfixturevalue("spec_server")
    return environment.url_for


@pytest.fixture
def browser(implementation):
    """A freshly launched browser, quit once the example is done."""
    if implementation.browser_class is None:
        pytest.skip("no browser configured; pass --spec-browser or set BROWSERSPEC_BROWSER")
    instance = new_browser()
    yield instance
    close_browser(instance)
