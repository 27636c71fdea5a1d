"""Structured logging helpers for the resolution pipeline.

Purpose
    Keep every diagnostic emitted while resolving configuration predictable and
    contextual, without forcing embedding services onto a logging backend.

Contents
    - ``TRACE_ID``: context variable storing the active trace identifier.
    - ``get_logger``: returns the package logger (silent by default).
    - ``bind_trace_id``: binds or clears the active trace identifier.
    - ``log_debug`` / ``log_info`` / ``log_warning`` / ``log_error``: emit
      structured entries through a single private emitter.
    - ``make_event``: builder for ``layer``/``path`` event payloads.

System Integration
    Used by the path resolver, file loaders, environment overlay and the
    composition root. Structured fields travel in ``record.context`` so
    handlers installed by the service can render them however they like.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_service_config_trace_id", default=None)
"""Trace identifier attached to every event of the current resolution."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_service_config")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so services may attach handlers."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    Examples
    --------
    >>> bind_trace_id('boot-1')
    >>> TRACE_ID.get()
    'boot-1'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug entry."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info entry."""

    _emit(logging.INFO, message, fields)


def log_warning(message: str, **fields: Any) -> None:
    """Emit a structured warning entry."""

    _emit(logging.WARNING, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error entry."""

    _emit(logging.ERROR, message, fields)


def make_event(
    layer: str,
    path: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a structured payload for a configuration layer event.

    Examples
    --------
    >>> make_event('base', 'etc/service.yml', {'keys': 4})
    {'layer': 'base', 'path': 'etc/service.yml', 'keys': 4}
    """

    event: dict[str, Any] = {"layer": layer, "path": path}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send *message* through the package logger with trace context attached."""

    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    _LOGGER.log(level, message, extra={"context": context})
