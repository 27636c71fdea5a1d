"""Domain-level configuration value objects.

Purpose
-------
Anchor the immutable :class:`ServiceConfig` snapshot that carries the resolved
service configuration and its provenance. This module contains no I/O.

Contents
--------
* :data:`SCHEMA` – fixed field table shared by every decoder.
* :class:`DatabaseConfig`, :class:`HTTPServerConfig`, :class:`RedisConfig`,
  :class:`AuthConfig`, :class:`MailServiceConfig`, :class:`LoggerConfig` –
  frozen section records.
* :class:`SourceInfo` – typed provenance entry (layer, path, dotted key).
* :class:`ServiceConfig` – the published snapshot, implementing the
  :class:`~lib_service_config.application.ports.ServiceConfigReader` accessors.

System Role
-----------
:mod:`lib_service_config.core` assembles a plain nested ``dict`` while layers
are applied and converts it into a :class:`ServiceConfig` exactly once, via
:meth:`ServiceConfig.from_mapping`. Nothing outside the core ever sees the
mutable payload.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from types import MappingProxyType
from typing import Any, Final, Mapping, TypedDict

UINT32_MAX: Final[int] = 2**32 - 1

#: Section keys mapped to their field names and Python types. The same keys are
#: used by JSON and YAML documents, so equivalent files decode identically.
SCHEMA: Final[Mapping[str, Mapping[str, type]]] = MappingProxyType(
    {
        "database": MappingProxyType(
            {"host_address": str, "port": str, "name": str, "user": str, "password": str}
        ),
        "http": MappingProxyType({"base_url": str, "host": str, "port": str}),
        "redis": MappingProxyType({"host": str, "port": str}),
        "auth": MappingProxyType(
            {
                "private_key": str,
                "public_key": str,
                "access_token_expiration_millis": int,
                "refresh_token_expiration_millis": int,
                "clean_up_session_millis": int,
            }
        ),
        "mail_service": MappingProxyType({"api_key": str}),
        "logger": MappingProxyType({"config_path": str}),
    }
)

#: Top-level scalar keys that are not sections.
SCALARS: Final[Mapping[str, type]] = MappingProxyType({"env": str, "service_name": str})


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Connection settings for the service database."""

    host_address: str = ""
    port: str = ""
    name: str = ""
    user: str = ""
    password: str = ""


@dataclass(frozen=True, slots=True)
class HTTPServerConfig:
    """Address the service's HTTP server binds to and advertises."""

    base_url: str = ""
    host: str = ""
    port: str = ""


@dataclass(frozen=True, slots=True)
class RedisConfig:
    """Single Redis instance address."""

    host: str = ""
    port: str = ""


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """Token signing keys and lifetimes (milliseconds, unsigned 32-bit)."""

    private_key: str = ""
    public_key: str = ""
    access_token_expiration_millis: int = 0
    refresh_token_expiration_millis: int = 0
    clean_up_session_millis: int = 0


@dataclass(frozen=True, slots=True)
class MailServiceConfig:
    """Credentials for the outbound mail provider."""

    api_key: str = ""


@dataclass(frozen=True, slots=True)
class LoggerConfig:
    """Location of the logging configuration consumed by the embedding service."""

    config_path: str = ""


_SECTION_TYPES: Final[Mapping[str, type]] = MappingProxyType(
    {
        "database": DatabaseConfig,
        "http": HTTPServerConfig,
        "redis": RedisConfig,
        "auth": AuthConfig,
        "mail_service": MailServiceConfig,
        "logger": LoggerConfig,
    }
)


class SourceInfo(TypedDict):
    """Describe the origin of a resolved field.

    Attributes
    ----------
    layer:
        ``"defaults"``, ``"base"``, ``"local_override"`` or ``"env"``.
    path:
        File that supplied the value; ``None`` for in-memory layers.
    key:
        Dotted key such as ``"database.host_address"``.
    """

    layer: str
    path: str | None
    key: str


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Immutable, fully-resolved service configuration.

    Why
    ----
    Components receive this object by reference and can only read from it:
    every section is a frozen dataclass and provenance is wrapped in a
    ``mappingproxy``.

    Examples
    --------
    >>> cfg = ServiceConfig(redis=RedisConfig(host="cache", port="6379"), env="live")
    >>> cfg.get_redis_config().port
    '6379'
    >>> cfg.get_env()
    'live'
    >>> cfg.env = "test"
    Traceback (most recent call last):
    ...
    dataclasses.FrozenInstanceError: cannot assign to field 'env'
    """

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    http: HTTPServerConfig = field(default_factory=HTTPServerConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    mail_service: MailServiceConfig = field(default_factory=MailServiceConfig)
    logger: LoggerConfig = field(default_factory=LoggerConfig)
    env: str = ""
    service_name: str = ""
    _meta: Mapping[str, SourceInfo] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Freeze provenance so callers cannot rewrite it after publication."""

        object.__setattr__(self, "_meta", MappingProxyType(dict(self._meta)))

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], meta: Mapping[str, SourceInfo] | None = None
    ) -> ServiceConfig:
        """Build a snapshot from a nested mapping shaped like :data:`SCHEMA`.

        Missing sections and fields keep their zero values; unknown keys are
        ignored.

        Examples
        --------
        >>> cfg = ServiceConfig.from_mapping({"http": {"port": "9876"}, "env": "test"})
        >>> cfg.get_server_port(), cfg.get_env(), cfg.get_database_config().host_address
        ('9876', 'test', '')
        """

        sections: dict[str, Any] = {}
        for name, section_type in _SECTION_TYPES.items():
            values = data.get(name) or {}
            known = {key: value for key, value in values.items() if key in SCHEMA[name]}
            sections[name] = section_type(**known)
        scalars = {key: data[key] for key in SCALARS if key in data}
        return cls(**sections, **scalars, _meta=meta or {})

    def get_database_config(self) -> DatabaseConfig:
        return self.database

    def get_auth_config(self) -> AuthConfig:
        return self.auth

    def get_redis_config(self) -> RedisConfig:
        return self.redis

    def get_mail_service_config(self) -> MailServiceConfig:
        return self.mail_service

    def get_http_config(self) -> HTTPServerConfig:
        return self.http

    def get_server_port(self) -> str:
        return self.http.port

    def get_env(self) -> str:
        return self.env

    def get_logger_config_path(self) -> str:
        return self.logger.config_path

    def get_service_name(self) -> str:
        return self.service_name

    def origin(self, key: str) -> SourceInfo | None:
        """Return provenance for dotted *key* or ``None`` when it kept its zero value.

        Examples
        --------
        >>> cfg = ServiceConfig(env="live", _meta={"env": {"layer": "env", "path": None, "key": "env"}})
        >>> cfg.origin("env")
        {'layer': 'env', 'path': None, 'key': 'env'}
        >>> cfg.origin("redis.host") is None
        True
        """

        return self._meta.get(key)

    def as_dict(self) -> dict[str, Any]:
        """Return a mutable nested ``dict`` copy in file shape (provenance excluded)."""

        payload: dict[str, Any] = {name: asdict(getattr(self, name)) for name in _SECTION_TYPES}
        for key in SCALARS:
            payload[key] = getattr(self, key)
        return payload

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise the snapshot to JSON.

        Examples
        --------
        >>> json.loads(ServiceConfig(env="test").to_json())["env"]
        'test'
        """

        return json.dumps(self.as_dict(), indent=indent, separators=(",", ":"), ensure_ascii=False)
