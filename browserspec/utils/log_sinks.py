# browserspec/utils/log_sinks.py
"""
Custom logging components for browserspec.

Browser launches and fixture-server events are logged from deep inside
fixtures, so the node id of the example being run is carried in a context
variable and stamped onto every record by a filter.
"""
import contextvars
import logging
from typing import Optional

# The node id of the example currently running, e.g.
# "browserspec/spec/browser_spec.py::TestTitle::test_returns_the_current_title".
example_id_context: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "example_id", default=None
)


class ExampleIdFilter(logging.Filter):
    """
    A logging filter that injects the current example_id from the contextvar
    into the log record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Adds the example_id to the log record if it exists in the context.

        :param record: The log record being processed.
        :type record: logging.LogRecord
        :return: Always returns True to allow the record to be processed.
        :rtype: bool
        """
        record.example_id = example_id_context.get()
        return True
