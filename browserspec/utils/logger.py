# browserspec/utils/logger.py
"""
Centralized logging setup for browserspec.

This module configures the root logger with a JSON formatter on stdout so that
browser diagnostics and fixture-server events stay machine readable inside
pytest's captured output.
"""
import logging
import sys
from typing import Any, MutableMapping

from pythonjsonlogger import jsonlogger

from browserspec.schemas.settings import get_settings
from browserspec.utils.log_sinks import ExampleIdFilter

_LOGGING_CONFIGURED = False


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Extends the standard logging adapter to support structured logging.

    Structured data passed via `extra` is nested under an `extra_data` key so
    it never collides with the standard LogRecord attributes.
    """

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        """Processes the log message and keyword arguments.

        :param msg: The original log message.
        :type msg: str
        :param kwargs: The keyword arguments passed to the log call.
        :type kwargs: MutableMapping[str, Any]
        :return: The processed message and keyword arguments.
        :rtype: tuple[str, MutableMapping[str, Any]]
        """
        original_extra_content = kwargs.get("extra")
        if original_extra_content is not None:
            kwargs["extra"] = {"extra_data": original_extra_content}
        return msg, kwargs


def setup_logger(
    name: str,
) -> StructuredLoggerAdapter:
    """Sets up the root logger and returns a structured child logger.

    On the first call, it configures the root logger with a JSON stdout
    handler. Subsequent calls simply retrieve a logger for the given name.

    :param name: The name of the logger, typically `__name__`.
    :type name: str
    :return: A `StructuredLoggerAdapter` instance ready for use.
    :rtype: StructuredLoggerAdapter
    """
    global _LOGGING_CONFIGURED

    if not _LOGGING_CONFIGURED:
        root_logger = logging.getLogger()

        log_level_str = get_settings().log_level.upper()
        level = getattr(logging, log_level_str, logging.INFO)
        root_logger.setLevel(level)

        console_handler = logging.StreamHandler(sys.stdout)
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(example_id)s %(message)s"
        )
        console_handler.setFormatter(formatter)
        console_handler.addFilter(ExampleIdFilter())
        root_logger.addHandler(console_handler)

        _LOGGING_CONFIGURED = True

    logger_instance = logging.getLogger(name)
    return StructuredLoggerAdapter(logger_instance, {})
