# tests/test_event.py
"""Tests for CanonicalEvent and level resolution."""

import logging

import pytest

from errorlog.errors import InvalidLevelError
from errorlog.event import DEFAULT_LEVEL, LEVELS, CanonicalEvent, resolve_level


class TestResolveLevel:
    def test_default_is_error(self) -> None:
        assert DEFAULT_LEVEL == logging.ERROR

    @pytest.mark.parametrize(("name", "expected"), sorted(LEVELS.items()))
    def test_names(self, name: str, expected: int) -> None:
        assert resolve_level(name) == expected
        assert resolve_level(name.upper()) == expected

    @pytest.mark.parametrize("level", sorted(LEVELS.values()))
    def test_numbers(self, level: int) -> None:
        assert resolve_level(level) == level

    @pytest.mark.parametrize("level", ["warn", "trace", 15, -1, 1.5, False])
    def test_rejects_non_standard(self, level: object) -> None:
        with pytest.raises(InvalidLevelError) as exc_info:
            resolve_level(level)  # type: ignore[arg-type]
        assert exc_info.value.level == level


class TestCanonicalEvent:
    def test_render_positional(self) -> None:
        event = CanonicalEvent(level=logging.ERROR, fields={}, message="{} of {}", args=(1, 2))
        assert event.render_message() == "1 of 2"

    def test_render_manual_numbering(self) -> None:
        event = CanonicalEvent(level=logging.ERROR, fields={}, message="{1} then {0}", args=("a", "b"))
        assert event.render_message() == "b then a"

    def test_no_message(self) -> None:
        event = CanonicalEvent(level=logging.ERROR, fields={})
        assert event.render_message() is None

    def test_frozen(self) -> None:
        event = CanonicalEvent(level=logging.ERROR, fields={})
        with pytest.raises(AttributeError):
            event.level = logging.INFO  # type: ignore[misc]

    def test_level_name(self) -> None:
        assert CanonicalEvent(level=logging.CRITICAL, fields={}).level_name == "critical"
