# src/errorlog/event.py
"""The canonical event produced by every log_error call shape."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from errorlog.errors import InvalidLevelError

# Levels a log_error call may attach. Only the standard stdlib levels are
# accepted so every sink can map them.
LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

DEFAULT_LEVEL = logging.ERROR


def resolve_level(level: int | str) -> int:
    """Normalize a level name or number to a stdlib logging level.

    Names are case-insensitive ("warning", "WARNING").

    Raises:
        InvalidLevelError: If level is not one of the standard levels
    """
    if isinstance(level, bool):
        raise InvalidLevelError(level)
    if isinstance(level, str):
        if level.lower() not in LEVELS:
            raise InvalidLevelError(level)
        return LEVELS[level.lower()]
    if isinstance(level, int) and level in LEVELS.values():
        return level
    raise InvalidLevelError(level)


@dataclass(frozen=True, slots=True)
class CanonicalEvent:
    """One normalized structured-log record.

    Attributes:
        level: stdlib logging level
        fields: Reserved error fields followed by caller fields, in order
        message: Message template with ``{}`` placeholders, or None
        args: Positional arguments for the template
    """

    level: int
    fields: Mapping[str, Any]
    message: str | None = None
    args: tuple[Any, ...] = ()

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level).lower()

    def render_message(self) -> str | None:
        """Substitute the positional args into the template."""
        if self.message is None:
            return None
        return self.message.format(*self.args)
