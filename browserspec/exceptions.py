# browserspec/exceptions.py
"""
Defines custom exception classes for browserspec.

Driver and navigation errors raised by Selenium are never wrapped; they reach
pytest untouched and fail the example. These classes cover the failures of
browserspec's own administrative layer.
"""


class BrowserSpecError(Exception):
    """Base exception class for all custom errors in browserspec."""

    pass


class ConfigurationError(BrowserSpecError):
    """Raised when the browser implementation cannot be resolved.

    This includes an unknown browser name, a remote run requested without a
    grid URL, or an implementation that was never given a browser class.
    """

    pass


class ServerError(BrowserSpecError):
    """Raised when the fixture server cannot bind or fails to come up.

    A fixture server that cannot serve pages makes every browser example
    meaningless, so this error is fatal to the suite.
    """

    def __init__(self, message: str, bind: str | None = None, port: int | None = None):
        """Initializes the ServerError with the address that failed."""
        super().__init__(message)
        self.bind = bind
        self.port = port


class GuardError(BrowserSpecError, ValueError):
    """Raised when a guard marker is declared with an unknown condition key
    or a malformed condition list.

    Inherits from `ValueError` since the problem is always a bad declaration.
    """

    pass
