# src/errorlog/sinks.py
"""Sinks that receive canonical events.

The sink is the structured event backend. errorlog hands it exactly one
CanonicalEvent per call and does not depend on anything it returns.
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import structlog

if TYPE_CHECKING:
    from errorlog.event import CanonicalEvent

DEFAULT_LOGGER_NAME = "errorlog"


@runtime_checkable
class EventSink(Protocol):
    """Protocol for event sinks.

    Error handling:
        - emit() is fire-and-forget from errorlog's point of view
        - errorlog does not catch exceptions raised by emit()
    """

    def emit(self, event: "CanonicalEvent") -> None:
        """Deliver a single canonical event."""
        ...


class StructlogSink:
    """Emit canonical events through a structlog logger.

    The rendered message becomes the structlog ``event`` and every field is
    passed as a keyword, so ``error.message`` and friends land in the event
    dict under their dotted names.

    Args:
        logger: A structlog bound logger. When omitted, the logger is looked
            up on every emit so later structlog reconfiguration applies.
    """

    def __init__(self, logger: Any = None) -> None:
        self._logger = logger

    @property
    def logger(self) -> Any:
        if self._logger is not None:
            return self._logger
        return structlog.get_logger(DEFAULT_LOGGER_NAME)

    def emit(self, event: "CanonicalEvent") -> None:
        self.logger.log(event.level, event.render_message(), **event.fields)


class ListSink:
    """Collect canonical events in memory.

    Useful in tests and when embedding errorlog in another event pipeline.

    Example:
        >>> sink = ListSink()
        >>> ErrorLog().emit(ValueError("boom"), sink=sink)
        >>> sink.events[0].fields["error.message"]
        'boom'
    """

    def __init__(self) -> None:
        self.events: list["CanonicalEvent"] = []

    def emit(self, event: "CanonicalEvent") -> None:
        self.events.append(event)

    def clear(self) -> None:
        self.events.clear()
