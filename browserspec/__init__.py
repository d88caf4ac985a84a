"""
browserspec core package.

Configures, launches and manages Selenium browsers for the browser behaviour
specs, and hosts the HTML fixtures they navigate to.
"""

__all__ = [
    "environment",
    "factory",
    "guards",
    "implementation",
    "plugin",
    "runner",
    "selector",
    "server",
]
