# browserspec/runner.py
"""
Loads the spec support modules and executes the bundled browser spec suite.
"""
from importlib import import_module
from pathlib import Path
from pkgutil import walk_packages
from typing import List, Optional, Sequence, Set

import pytest

from browserspec.utils.logger import setup_logger

logger = setup_logger(__name__)

SUPPORT_PACKAGE = "browserspec.spec.support"
SPEC_DIR = Path(__file__).resolve().parent / "spec"
SPEC_FILE_PATTERN = "*_spec.py"

# Track what we've imported so repeated calls stay cheap.
_IMPORTED_MODULES: Set[str] = set()


def find_support_modules(package: str = SUPPORT_PACKAGE) -> List[str]:
    """Names of the submodules of a support package, in discovery order.

    Only the package itself (and any subpackages) is imported, so pytest can
    still import the modules as plugins and rewrite their asserts.
    """
    pkg = import_module(package)
    return [
        m.name
        for m in walk_packages(getattr(pkg, "__path__", []), prefix=pkg.__name__ + ".")
    ]


def load_support(package: str = SUPPORT_PACKAGE) -> List[str]:
    """Import a support package and all its submodules.

    Import errors propagate: a broken support module would break every spec
    that relies on it.

    :param package: Dotted name of the support package.
    :type package: str
    :return: Names of the support submodules, in discovery order.
    :rtype: List[str]
    """
    names = find_support_modules(package)
    for name in names:
        if name in _IMPORTED_MODULES:
            continue
        import_module(name)
        _IMPORTED_MODULES.add(name)
        logger.debug("Imported support module: %s", name)
    return names


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Runs the browser spec suite and returns pytest's exit code.

    The plugin registers the support modules; the spec file pattern is passed
    explicitly since an installed package carries no pytest configuration.

    :param argv: Extra pytest arguments, e.g. ``["--spec-browser", "firefox", "-k", "title"]``.
    :type argv: Optional[Sequence[str]]
    :return: The pytest exit code as an int.
    :rtype: int
    """
    args = [
        str(SPEC_DIR),
        "-p",
        "browserspec.plugin",
        "-o",
        f"python_files={SPEC_FILE_PATTERN}",
        *(argv or []),
    ]
    logger.info("Running browser specs", extra={"args": args})
    return int(pytest.main(args))
