# src/errorlog/errors.py
"""Definition-time exceptions for errorlog.

These are raised when a log call is malformed: bad level, reserved field
name, broken message template, or a value that is not an error. They are
raised before anything is extracted or emitted. Extraction itself never
raises its own exceptions.
"""

from typing import Any


class ErrorLogDefinitionError(ValueError):
    """Base class for malformed log_error call shapes.

    Attributes:
        reason: Human-readable description of what is wrong with the call
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class InvalidLevelError(ErrorLogDefinitionError):
    """Raised when the requested level is not a standard logging level."""

    def __init__(self, level: Any) -> None:
        self.level = level
        super().__init__(f"Unknown log level {level!r}")


class ReservedFieldError(ErrorLogDefinitionError):
    """Raised when a caller field would shadow a reserved field name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Field name {name!r} is reserved")


class MessageTemplateError(ErrorLogDefinitionError):
    """Raised when a message template and its positional args disagree.

    Attributes:
        template: The offending template (None if args were given without one)
    """

    def __init__(self, template: str | None, reason: str) -> None:
        self.template = template
        super().__init__(f"Invalid message template {template!r}: {reason}")


class NotAnErrorValueError(ErrorLogDefinitionError):
    """Raised when the logged value is not an error value.

    There is no fallback to logging the value as a plain string.
    """

    def __init__(self, value: Any, reason: str | None = None) -> None:
        self.value = value
        detail = reason or "expected an exception or an object exposing __cause__"
        super().__init__(f"{type(value).__name__} is not an error value: {detail}")
