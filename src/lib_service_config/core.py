"""Composition root for ``lib_service_config``.

Purpose
-------
Provide the single entry point that orchestrates path resolution, format
dispatch, decoding, port validation and environment overrides, and publishes
the result as an immutable :class:`ServiceConfig`.

Contents
--------
* :class:`Resolution` – explicit success/failure result of a resolution.
* :func:`resolve_service_config` – runs the pipeline and returns a
  :class:`Resolution`; never raises for configuration problems.
* :func:`load_service_config` – same pipeline, raising :class:`ConfigError`.
* :func:`get_service_config` – process-wide cached snapshot for services that
  prefer a singleton over passing the object around.

System Role
-----------
Tier order is fixed: defaults, base file, local-override file, environment.
The port check runs after each file tier and not after the environment tier.
The working payload is a plain ``dict`` that never leaves this module; only the
frozen snapshot is returned.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

from .adapters.env.default import DefaultEnvLoader
from .adapters.file_loaders.dispatch import loader_for
from .adapters.file_loaders.structured import project
from .adapters.path_resolvers.default import DefaultPathResolver
from .application.merge import overlay
from .domain.config import ServiceConfig
from .domain.errors import ConfigError, ErrorKind, InvalidPort, NotFound
from .domain.validation import is_valid_port
from .observability import bind_trace_id, log_debug, log_error, log_info, log_warning, make_event


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of :func:`resolve_service_config`.

    Exactly one of :attr:`config` and :attr:`error` is set. The embedding
    service decides whether a failure terminates the process.

    Examples
    --------
    >>> Resolution.ok(ServiceConfig(env="test")).unwrap().get_env()
    'test'
    >>> failed = Resolution.err(InvalidPort("invalid port number '99999'"))
    >>> failed.is_ok, failed.kind, failed.detail
    (False, <ErrorKind.INVALID_PORT: 'invalid_port'>, "invalid port number '99999'")
    """

    config: ServiceConfig | None = None
    error: ConfigError | None = None

    @classmethod
    def ok(cls, config: ServiceConfig) -> Resolution:
        return cls(config=config)

    @classmethod
    def err(cls, error: ConfigError) -> Resolution:
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        return None if self.error is None else self.error.kind

    @property
    def detail(self) -> str | None:
        return None if self.error is None else str(self.error)

    def unwrap(self) -> ServiceConfig:
        """Return the snapshot or raise the error that stopped the resolution."""

        if self.error is not None:
            raise self.error
        assert self.config is not None
        return self.config


def resolve_service_config(
    *,
    search_dir: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
    defaults: Mapping[str, Any] | None = None,
) -> Resolution:
    """Resolve the service configuration once and return a :class:`Resolution`.

    Parameters
    ----------
    search_dir:
        Directory probed for ``service.*`` and ``localhost_service.*`` when the
        path variables are unset. Defaults to ``etc`` under the working
        directory.
    environ:
        Environment mapping used for path variables and overrides. Defaults to
        :data:`os.environ`.
    defaults:
        Values pre-seeded before any file is read, in file shape.

    Side Effects
    ------------
    Clears the trace binding and emits structured log events per tier.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> _ = (Path(tmp.name) / "service.json").write_text('{"http": {"port": "8080"}}', encoding="utf-8")
    >>> result = resolve_service_config(search_dir=tmp.name, environ={"ENV": "Test"})
    >>> result.is_ok, result.config.get_server_port(), result.config.get_env()
    (True, '8080', 'test')
    >>> tmp.cleanup()
    """

    env = os.environ if environ is None else environ
    resolver = DefaultPathResolver(search_dir=search_dir, environ=env)
    payload: dict[str, object] = {}
    meta: dict[str, dict[str, object]] = {}

    bind_trace_id(None)

    try:
        if defaults:
            overlay(payload, meta, project(defaults, path="<defaults>"), "defaults", None)

        base_path = resolver.base()
        if base_path is None:
            log_warning("service_config_missing", **make_event("base", None, {"search_dir": str(resolver.search_dir)}))
            return Resolution.ok(ServiceConfig.from_mapping(payload, meta))

        _apply_file("base", base_path, payload, meta)
        override_path = resolver.local_override()
        if override_path is not None:
            _apply_file("local_override", override_path, payload, meta)
    except ConfigError as exc:
        kind = exc.kind.value if exc.kind is not None else None
        log_error("configuration_failed", layer="file", path=None, kind=kind, error=str(exc))
        return Resolution.err(exc)

    env_data = DefaultEnvLoader(environ=env).load()
    if env_data:
        overlay(payload, meta, env_data, "env", None)
        log_debug("layer_loaded", **make_event("env", None, {"keys": len(env_data)}))

    config = ServiceConfig.from_mapping(payload, meta)
    log_info("configuration_resolved", layer="final", path=None, fields=len(meta))
    return Resolution.ok(config)


def load_service_config(
    *,
    search_dir: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
    defaults: Mapping[str, Any] | None = None,
) -> ServiceConfig:
    """Resolve the configuration and return the snapshot.

    Raises
    ------
    InvalidFormat
        A configuration file could not be decoded.
    InvalidPort
        A configuration file left the HTTP port in an invalid state.
    """

    return resolve_service_config(search_dir=search_dir, environ=environ, defaults=defaults).unwrap()


@lru_cache(maxsize=1)
def get_service_config() -> ServiceConfig:
    """Return the process-wide snapshot, resolving it from ``os.environ`` on first use.

    Resolution happens once per process; call ``get_service_config.cache_clear()``
    in tests that need a fresh snapshot.
    """

    return load_service_config()


def _apply_file(
    layer: str,
    path: str,
    payload: dict[str, object],
    meta: dict[str, dict[str, object]],
) -> None:
    """Decode *path* onto *payload* and check the HTTP port it leaves behind.

    Unknown suffixes and missing files are skipped.
    """

    loader = loader_for(path)
    if loader is None:
        log_debug("config_file_skipped", layer=layer, path=path, reason="unsupported_suffix")
        return
    try:
        data = loader.load(path)
    except NotFound:
        log_debug("config_file_skipped", layer=layer, path=path, reason="unavailable")
        return
    overlay(payload, meta, data, layer, path)
    log_debug("layer_loaded", **make_event(layer, path, {"keys": len(data)}))
    _check_port(payload, path)


def _check_port(payload: Mapping[str, object], path: str) -> None:
    """Raise :class:`InvalidPort` when the accumulated HTTP port is malformed."""

    http = payload.get("http")
    port = http.get("port", "") if isinstance(http, Mapping) else ""
    if not is_valid_port(port):
        raise InvalidPort(f"invalid port number {port!r} after loading {path}")


__all__ = [
    "Resolution",
    "resolve_service_config",
    "load_service_config",
    "get_service_config",
]
