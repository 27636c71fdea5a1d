"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by adapters, the composition root, and
embedding services. The hierarchy lives in the domain layer so outer layers may
depend on it without creating import cycles.

Contents
--------
* :class:`ConfigError` – umbrella base class for all configuration failures.
* :class:`InvalidFormat` – a found file could not be decoded into the record.
* :class:`ValidationError` – a decoded record failed a semantic check.
* :class:`InvalidPort` – the HTTP port failed :func:`is_valid_port`.
* :class:`NotFound` – an optional file is missing (absorbed by the core).
* :class:`ErrorKind` – stable identifiers carried by a failed resolution.

System Role
-----------
Adapters raise these exceptions; :mod:`lib_service_config.core` converts the
fatal ones into a failed :class:`~lib_service_config.core.Resolution` and
absorbs :class:`NotFound`.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Identifiers for the fatal failure classes of a resolution.

    Examples
    --------
    >>> ErrorKind.INVALID_PORT.value
    'invalid_port'
    """

    DECODE_ERROR = "decode_error"
    INVALID_PORT = "invalid_port"


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_service_config``.

    Subclasses carry an :attr:`kind` so callers holding only the exception can
    still report the same identifier as a failed resolution.
    """

    kind: ErrorKind | None = None


class InvalidFormat(ConfigError):
    """Raised when a configuration file cannot be decoded.

    Typical Sources
    ---------------
    :mod:`json` and :mod:`yaml` parse errors, documents that are not mappings,
    and known fields holding a value of the wrong type.
    """

    kind = ErrorKind.DECODE_ERROR


class ValidationError(ConfigError):
    """A syntactically valid configuration failed a semantic check."""


class InvalidPort(ValidationError):
    """The HTTP server port is not a valid TCP port representation."""

    kind = ErrorKind.INVALID_PORT


class NotFound(ConfigError):
    """Represents a missing-but-optional file.

    The composition root treats this as a non-fatal condition and skips the
    file, the same way a missing local-override file is skipped.
    """
