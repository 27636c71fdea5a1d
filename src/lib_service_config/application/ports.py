"""Application-layer ports describing adapter and consumer contracts.

Purpose
-------
Define the structural contracts that adapters satisfy so the composition root
can orchestrate resolution without depending on concrete implementations, and
the read-only surface that consuming components depend on.

Contents
--------
* :class:`PathResolver` – picks the file backing a configuration slot.
* :class:`FileLoader` – decodes one file into a schema-shaped mapping.
* :class:`EnvLoader` – collects environment overrides as a payload.
* :class:`ServiceConfigReader` – getters exposed to consumers.

These protocols are ``runtime_checkable`` so contract tests can assert
``isinstance`` against the default adapters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.config import (
        AuthConfig,
        DatabaseConfig,
        HTTPServerConfig,
        MailServiceConfig,
        RedisConfig,
        SourceInfo,
    )


@runtime_checkable
class PathResolver(Protocol):
    """Locate the base and local-override configuration files.

    Methods return ``None`` when the slot is not configured; that is never an
    error.
    """

    def resolve(self, env_var: str, default_name: str) -> str | None:
        """Return the explicit path from *env_var* or the first existing default."""

    def base(self) -> str | None:
        """Return the base configuration file path."""

    def local_override(self) -> str | None:
        """Return the local-override configuration file path."""


@runtime_checkable
class FileLoader(Protocol):
    """Decode a structured configuration file.

    Implementations raise ``NotFound`` for a missing file and ``InvalidFormat``
    for content that cannot be decoded.
    """

    def load(self, path: str) -> Mapping[str, object]:
        """Read *path* and return its schema-shaped payload."""


@runtime_checkable
class EnvLoader(Protocol):
    """Translate the fixed environment override table into a payload."""

    def load(self) -> dict[str, object]:
        """Return overrides shaped like the schema, omitting unset or ignored variables."""


@runtime_checkable
class ServiceConfigReader(Protocol):
    """Read-only capability handed to every consumer of the configuration."""

    def get_database_config(self) -> DatabaseConfig: ...

    def get_auth_config(self) -> AuthConfig: ...

    def get_redis_config(self) -> RedisConfig: ...

    def get_mail_service_config(self) -> MailServiceConfig: ...

    def get_http_config(self) -> HTTPServerConfig: ...

    def get_server_port(self) -> str: ...

    def get_env(self) -> str: ...

    def get_logger_config_path(self) -> str: ...

    def get_service_name(self) -> str: ...

    def origin(self, key: str) -> SourceInfo | None: ...

    def as_dict(self) -> dict[str, Any]: ...
