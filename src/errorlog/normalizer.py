# src/errorlog/normalizer.py
"""Call normalization: every log_error call shape becomes one CanonicalEvent.

Call shapes accepted by ``log_error``:

    log_error(e)                                    # error alone
    log_error(e, level="warning")                   # custom level
    log_error(e, "The connection was dropped")      # message
    log_error(e, "Here I am, {} {}", "my", "friend")  # formatted message
    log_error(e, "Yay", custom_field="value")       # extra fields
    log_error(e, fields={"http.status": 500})       # non-identifier names
    log_error(e, "Hello", path=debug(p), name=display(n))  # repr()/str()
    log_error(deref(future), "Job failed")          # one dereference

The same shapes can be built once and reused with ``ErrorLog``:

    failed_upload = ErrorLog().at("warning").with_fields(bucket="media")
    failed_upload.with_message("upload of {} failed", key).emit(e)

Every shape reduces to: level, the three reserved error fields, caller
fields in the order given, an optional message template and its args.
Malformed shapes raise ErrorLogDefinitionError before anything is
extracted or emitted.
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from string import Formatter
from types import MappingProxyType
from typing import Any

from errorlog.deref import resolve_error_value
from errorlog.errors import ErrorLogDefinitionError, MessageTemplateError, ReservedFieldError
from errorlog.event import DEFAULT_LEVEL, CanonicalEvent, resolve_level
from errorlog.fields import MAX_SOURCE_DEPTH, RESERVED_FIELDS, error_fields
from errorlog.sinks import EventSink, StructlogSink

# Keys the sink itself writes. structlog keeps the message under "event" and
# BoundLogger.log() takes "level" as a parameter; configure_logging() adds
# "level" and "timestamp" to every event dict.
SINK_RESERVED_FIELDS = frozenset({"event", "level", "timestamp"})

_PLACEHOLDER_HEAD = re.compile(r"[.\[]")


@dataclass(frozen=True, slots=True)
class Display:
    """Field value recorded with ``str()``."""

    value: Any

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Debug:
    """Field value recorded with ``repr()``."""

    value: Any

    def render(self) -> str:
        return repr(self.value)


def display(value: Any) -> Display:
    """Record a field using its display form (``str(value)``)."""
    return Display(value)


def debug(value: Any) -> Debug:
    """Record a field using its debug form (``repr(value)``)."""
    return Debug(value)


def _render_field(value: Any) -> Any:
    if isinstance(value, Display | Debug):
        return value.render()
    return value


def _placeholders(template: str) -> Iterator[str]:
    for _literal, name, spec, _conversion in Formatter().parse(template):
        if name is None:
            continue
        yield name
        # Nested placeholders in a format spec ("{:>{}}") consume args too
        if spec:
            yield from _placeholders(spec)


def check_template(template: str | None, args: tuple[Any, ...]) -> None:
    """Validate that a message template and its positional args agree.

    Templates use ``str.format`` placeholders: automatic (``{}``) or manual
    (``{0}``) numbering, not both. Every arg must be consumed, and the
    template must render with the given args.

    Raises:
        MessageTemplateError: If the template cannot be rendered with args
    """
    if template is None:
        if args:
            raise MessageTemplateError(None, f"{len(args)} positional arg(s) given without a message")
        return
    if not isinstance(template, str):
        raise MessageTemplateError(repr(template), f"message must be a str, got {type(template).__name__}")

    try:
        names = list(_placeholders(template))
    except ValueError as e:
        raise MessageTemplateError(template, str(e)) from e

    automatic = 0
    manual: set[int] = set()
    for name in names:
        head = _PLACEHOLDER_HEAD.split(name, maxsplit=1)[0]
        if head == "":
            automatic += 1
        elif head.isdigit():
            manual.add(int(head))
        else:
            raise MessageTemplateError(template, f"named placeholder {{{name}}} is not supported, pass values positionally")

    if automatic and manual:
        raise MessageTemplateError(template, "cannot mix automatic and manual placeholder numbering")
    if manual:
        if manual != set(range(len(args))):
            raise MessageTemplateError(template, f"placeholders {sorted(manual)} do not match {len(args)} arg(s)")
    elif automatic != len(args):
        raise MessageTemplateError(template, f"{automatic} placeholder(s) but {len(args)} arg(s)")

    # Format specs, conversions and attribute/index lookups only fail when
    # rendered; the args are known now, so render once.
    try:
        template.format(*args)
    except (ValueError, TypeError, AttributeError, IndexError, KeyError) as e:
        raise MessageTemplateError(template, str(e)) from e


def check_field_names(fields: Mapping[Any, Any]) -> None:
    """Reject caller field names that are empty or reserved.

    Raises:
        ErrorLogDefinitionError: If a name is not a non-empty string
        ReservedFieldError: If a name shadows a reserved field
    """
    for name in fields:
        if not isinstance(name, str) or not name:
            raise ErrorLogDefinitionError(f"Field names must be non-empty strings, got {name!r}")
        if name in RESERVED_FIELDS or name in SINK_RESERVED_FIELDS:
            raise ReservedFieldError(name)


@dataclass(frozen=True, slots=True)
class ErrorLog:
    """A validated, reusable log_error call shape.

    Construction validates everything that can be wrong with a call, so a
    built ErrorLog can only fail at emit time if the error value itself (or
    the sink) raises. Builder methods return new instances.

    Attributes:
        level: stdlib logging level (names are accepted and normalized)
        fields: Caller fields, in declaration order
        message: Message template with ``{}`` placeholders, or None
        args: Positional args for the template
        max_source_depth: Maximum number of causes recorded in the chain
    """

    level: int = DEFAULT_LEVEL
    fields: Mapping[str, Any] = field(default_factory=dict)
    message: str | None = None
    args: tuple[Any, ...] = ()
    max_source_depth: int = MAX_SOURCE_DEPTH

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", resolve_level(self.level))
        fields = dict(self.fields)
        check_field_names(fields)
        object.__setattr__(self, "fields", MappingProxyType(fields))
        object.__setattr__(self, "args", tuple(self.args))
        check_template(self.message, self.args)
        if not isinstance(self.max_source_depth, int) or self.max_source_depth < 0:
            raise ErrorLogDefinitionError(f"max_source_depth must be a non-negative int, got {self.max_source_depth!r}")

    def at(self, level: int | str) -> "ErrorLog":
        """Return a copy logging at ``level``."""
        return replace(self, level=level)

    def with_fields(self, mapping: Mapping[str, Any] | None = None, /, **fields: Any) -> "ErrorLog":
        """Return a copy with extra caller fields.

        A name declared again keeps its original position and takes the
        latest value.
        """
        return replace(self, fields={**self.fields, **(mapping or {}), **fields})

    def with_message(self, template: str, /, *args: Any) -> "ErrorLog":
        """Return a copy with a message template and its positional args."""
        return replace(self, message=template, args=args)

    def event(self, error: Any) -> CanonicalEvent:
        """Build the canonical event for ``error`` without emitting it.

        Raises:
            NotAnErrorValueError: If error is not an error value, or a
                ``deref()`` marker that does not resolve to one
        """
        target = resolve_error_value(error)
        fields = error_fields(target, self.max_source_depth)
        for name, value in self.fields.items():
            fields[name] = _render_field(value)
        return CanonicalEvent(
            level=self.level,
            fields=MappingProxyType(fields),
            message=self.message,
            args=self.args,
        )

    def emit(self, error: Any, sink: EventSink | None = None) -> None:
        """Build the canonical event for ``error`` and hand it to the sink once.

        Args:
            error: Error value, or a ``deref()`` marker
            sink: Event sink (default: StructlogSink on the "errorlog" logger)
        """
        event = self.event(error)
        if sink is None:
            sink = StructlogSink()
        sink.emit(event)


def log_error(
    error: Any,
    message: str | None = None,
    /,
    *args: Any,
    level: int | str = DEFAULT_LEVEL,
    fields: Mapping[str, Any] | None = None,
    logger: Any = None,
    sink: EventSink | None = None,
    **extra: Any,
) -> None:
    """Log an error with its message, details and source chain attached.

    ``error`` and ``message`` are positional-only, so caller fields named
    ``error`` or ``message`` are plain keywords and never clash with the
    reserved ``error.*`` fields.

    Args:
        error: Error value, or a ``deref()`` marker
        message: Message template with ``{}`` placeholders
        *args: Positional args for the template
        level: Level name or number (default: ERROR)
        fields: Caller fields whose names are not valid identifiers
        logger: structlog logger to emit through
        sink: Event sink to emit through (exclusive with logger)
        **extra: Caller fields

    Raises:
        ErrorLogDefinitionError: If the call shape is malformed

    Example:
        >>> e = OSError("My error")
        >>> log_error(e, "failed for {}", "alice", user_id=42)
    """
    if logger is not None and sink is not None:
        raise ErrorLogDefinitionError("Pass either logger or sink, not both")
    call = ErrorLog(
        level=level,
        fields={**(fields or {}), **extra},
        message=message,
        args=args,
    )
    call.emit(error, sink=sink if sink is not None else StructlogSink(logger))
