"""Public package surface for ``lib_service_config``.

Services call :func:`load_service_config` (or :func:`resolve_service_config`
for an explicit result) once at startup and pass the returned
:class:`ServiceConfig` to the components that need it.
"""

from __future__ import annotations

from .application.ports import ServiceConfigReader
from .core import Resolution, get_service_config, load_service_config, resolve_service_config
from .domain.config import (
    AuthConfig,
    DatabaseConfig,
    HTTPServerConfig,
    LoggerConfig,
    MailServiceConfig,
    RedisConfig,
    ServiceConfig,
)
from .domain.errors import ConfigError, ErrorKind, InvalidFormat, InvalidPort, NotFound, ValidationError
from .domain.validation import is_valid_port
from .observability import bind_trace_id, get_logger

__all__ = [
    "AuthConfig",
    "ConfigError",
    "DatabaseConfig",
    "ErrorKind",
    "HTTPServerConfig",
    "InvalidFormat",
    "InvalidPort",
    "LoggerConfig",
    "MailServiceConfig",
    "NotFound",
    "RedisConfig",
    "Resolution",
    "ServiceConfig",
    "ServiceConfigReader",
    "ValidationError",
    "bind_trace_id",
    "get_logger",
    "get_service_config",
    "is_valid_port",
    "load_service_config",
    "resolve_service_config",
]
