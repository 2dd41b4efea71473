# src/errorlog/deref.py
"""One-step dereferencing of error reports.

Some report types wrap an error without being one themselves. A finished
``concurrent.futures.Future`` holds its exception but has no cause chain of
its own. Mark such values with ``deref()`` at the call site:

    log_error(deref(future), "Background job failed")

Exactly one dereference is applied. Resolution is explicit dispatch on the
wrapper type; applications register their own report types:

    @dereference.register
    def _(report: MyReport) -> BaseException:
        return report.error
"""

import asyncio
import concurrent.futures
from dataclasses import dataclass
from functools import singledispatch
from typing import Any

from errorlog.errors import NotAnErrorValueError
from errorlog.fields import is_error_value


@dataclass(frozen=True, slots=True)
class Deref:
    """Call-site marker: dereference ``wrapped`` once before extraction."""

    wrapped: Any


def deref(wrapped: Any) -> Deref:
    """Mark a value to be dereferenced once before its fields are extracted."""
    return Deref(wrapped)


@singledispatch
def dereference(wrapped: Any) -> Any:
    """Return the error value a wrapper refers to.

    Raises:
        NotAnErrorValueError: If no dereference is registered for the type
    """
    raise NotAnErrorValueError(wrapped, "no dereference registered for this type")


def _finished_exception(wrapped: Any) -> Any:
    if wrapped.cancelled():
        raise NotAnErrorValueError(wrapped, "future was cancelled")
    if not wrapped.done():
        raise NotAnErrorValueError(wrapped, "future has not finished")
    return wrapped.exception()


@dereference.register
def _(wrapped: concurrent.futures.Future) -> Any:  # type: ignore[type-arg]
    return _finished_exception(wrapped)


@dereference.register
def _(wrapped: asyncio.Future) -> Any:  # type: ignore[type-arg]
    return _finished_exception(wrapped)


def resolve_error_value(value: Any) -> Any:
    """Return the error value to extract fields from.

    Plain error values are returned as is. ``Deref`` markers are
    dereferenced exactly once, and the result must itself be an error value.

    Raises:
        NotAnErrorValueError: If the value, or its single dereference, is not
            an error value
    """
    if isinstance(value, Deref):
        target = dereference(value.wrapped)
        if not is_error_value(target):
            raise NotAnErrorValueError(value.wrapped, f"dereferences to {type(target).__name__}, not an error value")
        return target
    if not is_error_value(value):
        raise NotAnErrorValueError(value)
    return value
