# browserspec/environment.py
"""
Process-wide browserspec state: the active Implementation, the fixture
directories, the fixture server and the URL helpers built on top of them.
"""
from pathlib import Path
from typing import Callable, List, Optional

from browserspec.implementation import Implementation
from browserspec.schemas.settings import get_settings
from browserspec.selector import build_implementation
from browserspec.server import FixtureServer

BUNDLED_HTML_DIR = Path(__file__).resolve().parent / "spec" / "html"

_IMPLEMENTATION: Optional[Implementation] = None
_HTMLS: Optional[List[str]] = None
_SERVER: Optional[FixtureServer] = None


def htmls() -> List[str]:
    """The fixture directories, bundled one first.

    The returned list is live: support modules may append their own directories.
    """
    global _HTMLS
    if _HTMLS is None:
        _HTMLS = [str(BUNDLED_HTML_DIR), *get_settings().html_dirs]
    return _HTMLS


def get_server() -> FixtureServer:
    global _SERVER
    if _SERVER is None:
        settings = get_settings()
        _SERVER = FixtureServer(
            htmls(), bind=settings.server_bind, port=settings.server_port
        )
    return _SERVER


def uses_public_server() -> bool:
    return get_settings().public_server


def host() -> str:
    settings = get_settings()
    if settings.public_server:
        return settings.public_server_url.rstrip("/")
    server = get_server()
    return f"http://{server.bind}:{server.port}"


def url_for(path: str) -> str:
    return f"{host()}/{path.lstrip('/')}"


def get_implementation(
    configure: Optional[Callable[[Implementation], None]] = None,
) -> Implementation:
    """Returns the active Implementation, building it from settings on first access.

    :param configure: Optional hook called with the freshly built Implementation.
    :type configure: Optional[Callable[[Implementation], None]]
    :return: The active Implementation.
    :rtype: Implementation
    """
    global _IMPLEMENTATION
    if _IMPLEMENTATION is None:
        imp = build_implementation(get_settings())
        if configure is not None:
            configure(imp)
        _IMPLEMENTATION = imp
    return _IMPLEMENTATION


def set_implementation(imp: Implementation) -> None:
    global _IMPLEMENTATION
    if not isinstance(imp, Implementation):
        raise TypeError(f"expected Implementation, got {type(imp).__name__}")
    _IMPLEMENTATION = imp


def reset() -> None:
    """Forget the Implementation, fixture directories and server (settings reloads)."""
    global _IMPLEMENTATION, _HTMLS, _SERVER
    if _SERVER is not None:
        _SERVER.stop()
    _IMPLEMENTATION = None
    _HTMLS = None
    _SERVER = None
