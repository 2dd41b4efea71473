# src/errorlog/fields.py
"""Error field extraction.

Every error logged through errorlog carries the same three fields, so
queries and dashboards can rely on one schema across a codebase:

- ``error.message``: display form of the error (``str(err)``)
- ``error.details``: debug form of the error (``repr(err)``)
- ``error.source_chain``: display form of every cause, nearest first

The functions here can also be used directly with any structlog logger:

    logger.error(
        "The connection was dropped",
        **{
            ERROR_MESSAGE: error_message(e),
            ERROR_DETAILS: error_details(e),
            ERROR_SOURCE_CHAIN: error_source_chain(e),
        },
    )

Cause links follow the interpreter's own traceback rule: ``__cause__``
when set, otherwise ``__context__`` unless ``__suppress_context__`` is true.

Exceptions raised by an error's ``__str__`` or ``__repr__`` propagate
unchanged.
"""

from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

ERROR_MESSAGE = "error.message"
ERROR_DETAILS = "error.details"
ERROR_SOURCE_CHAIN = "error.source_chain"

RESERVED_FIELDS: frozenset[str] = frozenset({ERROR_MESSAGE, ERROR_DETAILS, ERROR_SOURCE_CHAIN})

# Cause chains are walked at most this deep. Python exceptions can be
# chained into cycles by hand (e.cause = e), so traversal must be bounded.
MAX_SOURCE_DEPTH = 32


@runtime_checkable
class ErrorLike(Protocol):
    """Error values that are not exceptions.

    Any object exposing ``__cause__`` (an error value or None) qualifies.
    ``__context__`` and ``__suppress_context__`` are honoured when present.
    Display and debug forms come from ``__str__`` and ``__repr__``.
    """

    __cause__: Any


def is_error_value(value: object) -> bool:
    """Return True if value can be passed to the extraction functions.

    Exception classes are not error values, only their instances.
    """
    if isinstance(value, type):
        return False
    return isinstance(value, (BaseException, ErrorLike))


def _cause_of(error: Any) -> Any:
    cause = error.__cause__
    if cause is None and not getattr(error, "__suppress_context__", False):
        cause = getattr(error, "__context__", None)
    return cause


def iter_sources(error: Any, max_depth: int = MAX_SOURCE_DEPTH) -> Iterator[Any]:
    """Yield the causes of an error, nearest first.

    The error itself is not yielded. Stops silently after ``max_depth``
    causes, when a cause already seen is reached again, or when a cause is
    not itself an error value.

    Args:
        error: Error value whose causes to walk
        max_depth: Maximum number of causes to yield

    Yields:
        Each ancestor error value
    """
    seen = {id(error)}
    current = _cause_of(error)
    depth = 0
    while is_error_value(current) and depth < max_depth:
        if id(current) in seen:
            return
        seen.add(id(current))
        yield current
        depth += 1
        current = _cause_of(current)


def error_message(error: Any) -> str:
    """Display form of the error, as a user-facing renderer would show it."""
    return str(error)


def error_details(error: Any) -> str:
    """Debug form of the error, which may reveal internal state."""
    return repr(error)


def error_source_chain(error: Any, max_depth: int = MAX_SOURCE_DEPTH) -> list[str]:
    """Display forms of the error's causes, nearest cause first.

    Returns an empty list when the error has no cause.

    Example:
        >>> try:
        ...     try:
        ...         raise KeyError("B msg")
        ...     except KeyError as inner:
        ...         raise RuntimeError("A msg") from inner
        ... except RuntimeError as e:
        ...     error_source_chain(e)
        ["'B msg'"]
    """
    return [error_message(source) for source in iter_sources(error, max_depth)]


def error_fields(error: Any, max_depth: int = MAX_SOURCE_DEPTH) -> dict[str, Any]:
    """All three error fields, keyed by their reserved names."""
    return {
        ERROR_MESSAGE: error_message(error),
        ERROR_DETAILS: error_details(error),
        ERROR_SOURCE_CHAIN: error_source_chain(error, max_depth),
    }
