# tests/test_sinks.py
"""Tests for event sinks."""

import logging
from types import MappingProxyType
from unittest.mock import MagicMock

import structlog
from structlog.testing import capture_logs

from errorlog.event import CanonicalEvent
from errorlog.fields import ERROR_DETAILS, ERROR_MESSAGE, ERROR_SOURCE_CHAIN
from errorlog.normalizer import log_error
from errorlog.sinks import EventSink, ListSink, StructlogSink


def _event(**overrides: object) -> CanonicalEvent:
    values: dict[str, object] = {
        "level": logging.ERROR,
        "fields": MappingProxyType({ERROR_MESSAGE: "boom", ERROR_DETAILS: "ValueError('boom')", ERROR_SOURCE_CHAIN: []}),
        "message": "failed for {}",
        "args": ("alice",),
    }
    values.update(overrides)
    return CanonicalEvent(**values)  # type: ignore[arg-type]


class TestProtocol:
    def test_builtin_sinks_implement_protocol(self) -> None:
        assert isinstance(StructlogSink(), EventSink)
        assert isinstance(ListSink(), EventSink)


class TestStructlogSink:
    def test_emits_rendered_message_and_fields(self) -> None:
        logger = MagicMock()
        StructlogSink(logger).emit(_event())

        logger.log.assert_called_once_with(
            logging.ERROR,
            "failed for alice",
            **{ERROR_MESSAGE: "boom", ERROR_DETAILS: "ValueError('boom')", ERROR_SOURCE_CHAIN: []},
        )

    def test_no_message(self) -> None:
        logger = MagicMock()
        StructlogSink(logger).emit(_event(message=None, args=()))

        assert logger.log.call_args.args == (logging.ERROR, None)

    def test_default_logger_goes_through_structlog(self) -> None:
        with capture_logs() as logs:
            StructlogSink().emit(_event(level=logging.WARNING))

        [entry] = logs
        assert entry["log_level"] == "warning"
        assert entry["event"] == "failed for alice"
        assert entry[ERROR_MESSAGE] == "boom"

    def test_bound_context_is_kept(self) -> None:
        with capture_logs() as logs:
            logger = structlog.get_logger().bind(request_id="r-1")
            StructlogSink(logger).emit(_event())

        assert logs[0]["request_id"] == "r-1"


class TestLogErrorThroughStructlog:
    """log_error without a sink lands in structlog."""

    def test_error_alone(self, chained_error: BaseException) -> None:
        with capture_logs() as logs:
            log_error(chained_error)

        [entry] = logs
        assert entry["log_level"] == "error"
        assert "event" not in entry
        assert entry[ERROR_MESSAGE] == "A msg"
        assert entry[ERROR_DETAILS] == "RuntimeError('A msg')"
        assert entry[ERROR_SOURCE_CHAIN] == ["B msg", "C msg"]

    def test_message_level_and_fields(self) -> None:
        with capture_logs() as logs:
            log_error(OSError("My error"), "failed for {}", "alice", level="info", user_id=42)

        [entry] = logs
        assert entry["log_level"] == "info"
        assert entry["event"] == "failed for alice"
        assert entry["user_id"] == 42

    def test_explicit_logger(self) -> None:
        with capture_logs() as logs:
            logger = structlog.get_logger("payments").bind(order_id=7)
            log_error(OSError("card declined"), "Charge failed", logger=logger)

        [entry] = logs
        assert entry["order_id"] == 7
        assert entry[ERROR_MESSAGE] == "card declined"


class TestListSink:
    def test_collects_and_clears(self) -> None:
        sink = ListSink()
        sink.emit(_event())
        sink.emit(_event(level=logging.INFO))
        assert [e.level for e in sink.events] == [logging.ERROR, logging.INFO]

        sink.clear()
        assert sink.events == []
