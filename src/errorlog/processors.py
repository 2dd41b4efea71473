# src/errorlog/processors.py
"""structlog processor that expands error values into the reserved fields.

For code that logs through structlog directly:

    logger.warning("Retrying upload", error=e, attempt=3)

becomes an event dict carrying ``error.message``, ``error.details`` and
``error.source_chain`` instead of the raw exception object.
"""

from typing import Any

from errorlog.fields import MAX_SOURCE_DEPTH, RESERVED_FIELDS, error_fields, is_error_value


class ErrorFieldsProcessor:
    """Replace an error value under ``key`` with the three error fields.

    Values under ``key`` that are not error values are left untouched, so
    ``error="timeout"`` still logs as a plain string. Events that already
    carry error fields are left untouched too.

    Args:
        key: Event dict key holding the error value
        max_depth: Maximum number of causes recorded in the chain
    """

    def __init__(self, key: str = "error", max_depth: int = MAX_SOURCE_DEPTH) -> None:
        self.key = key
        self.max_depth = max_depth

    def __call__(
        self,
        logger: Any,
        method_name: str,
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        if self.key not in event_dict or not is_error_value(event_dict[self.key]):
            return event_dict
        # Fields already set by log_error() win over a caller field that
        # happens to hold another exception.
        if not RESERVED_FIELDS.isdisjoint(event_dict):
            return event_dict
        error = event_dict.pop(self.key)
        event_dict.update(error_fields(error, self.max_depth))
        return event_dict


add_error_fields = ErrorFieldsProcessor()
