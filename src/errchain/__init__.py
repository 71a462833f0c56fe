"""Chained errors with separate public and diagnostic messages."""

from __future__ import annotations

from loguru import logger

from .chain import (
    GENERIC_PUBLIC_MESSAGE,
    NIL_STRING,
    Attributes,
    ErrorChain,
    new,
)
from .config import (
    Settings,
    configure,
    disable_stack_trace,
    enable_stack_trace,
    is_recording_stack_trace,
    set_record_stack_trace,
    stack_trace_recording,
)
from .functions import as_chain, full_error, get_attrs, stack_trace
from .site import CaptureSite
from .wrap import wrap_errors

logger.disable(__name__)

__all__ = [
    "Attributes",
    "CaptureSite",
    "ErrorChain",
    "GENERIC_PUBLIC_MESSAGE",
    "NIL_STRING",
    "Settings",
    "as_chain",
    "configure",
    "disable_stack_trace",
    "enable_stack_trace",
    "full_error",
    "get_attrs",
    "is_recording_stack_trace",
    "new",
    "set_record_stack_trace",
    "stack_trace",
    "stack_trace_recording",
    "wrap_errors",
]
