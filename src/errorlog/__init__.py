"""
errorlog: capture an error and all its key properties in a structured event.

    from errorlog import log_error

    e = OSError("My error")
    log_error(e, "The connection was dropped")

The event carries:

- ``error.message``: the display form of the error (``str(e)``)
- ``error.details``: the debug form of the error (``repr(e)``)
- ``error.source_chain``: the display form of every cause, nearest first

Report types that wrap an error without being one are dereferenced once
with ``deref()``:

    log_error(deref(future), "Background job failed")
"""

from errorlog.deref import Deref, deref, dereference
from errorlog.errors import (
    ErrorLogDefinitionError,
    InvalidLevelError,
    MessageTemplateError,
    NotAnErrorValueError,
    ReservedFieldError,
)
from errorlog.event import CanonicalEvent
from errorlog.fields import (
    ERROR_DETAILS,
    ERROR_MESSAGE,
    ERROR_SOURCE_CHAIN,
    error_details,
    error_message,
    error_source_chain,
)
from errorlog.normalizer import ErrorLog, debug, display, log_error
from errorlog.processors import ErrorFieldsProcessor, add_error_fields
from errorlog.sinks import EventSink, ListSink, StructlogSink

__version__ = "0.1.0"

__all__ = [
    "ERROR_DETAILS",
    "ERROR_MESSAGE",
    "ERROR_SOURCE_CHAIN",
    "CanonicalEvent",
    "Deref",
    "ErrorFieldsProcessor",
    "ErrorLog",
    "ErrorLogDefinitionError",
    "EventSink",
    "InvalidLevelError",
    "ListSink",
    "MessageTemplateError",
    "NotAnErrorValueError",
    "ReservedFieldError",
    "StructlogSink",
    "add_error_fields",
    "debug",
    "deref",
    "dereference",
    "display",
    "error_details",
    "error_message",
    "error_source_chain",
    "log_error",
]
