"""Filesystem path resolution for the two configuration file tiers.

Purpose
-------
Implement the :class:`lib_service_config.application.ports.PathResolver`
protocol. The adapter is the only component that knows the environment
variables and default locations used to find configuration files.

Contents
--------
* :data:`SERVICE_CONFIG_PATH_ENV` / :data:`LOCALHOST_CONFIG_PATH_ENV` –
  variables holding explicit file paths.
* :data:`DEFAULT_SEARCH_DIR`, :data:`SEARCH_SUFFIXES` – default search order.
* :class:`DefaultPathResolver` – resolves the base and local-override slots.

System Role
-----------
Feeds :func:`lib_service_config.core.resolve_service_config` with at most one
path per tier. An unset slot is reported as ``None`` and is never an error.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final, Mapping

from ...observability import log_debug

SERVICE_CONFIG_PATH_ENV: Final[str] = "service_config_path"
LOCALHOST_CONFIG_PATH_ENV: Final[str] = "localhost_service_config_path"

BASE_CONFIG_NAME: Final[str] = "service"
LOCALHOST_CONFIG_NAME: Final[str] = "localhost_service"

DEFAULT_SEARCH_DIR: Final[str] = "etc"

#: Probed in this order; the first existing file wins.
SEARCH_SUFFIXES: Final[tuple[str, ...]] = (".json", ".yaml", ".yml")


class DefaultPathResolver:
    """Resolve configuration file paths from the environment and ``etc/``.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> _ = (Path(tmp.name) / "service.yml").write_text("env: test", encoding="utf-8")
    >>> resolver = DefaultPathResolver(search_dir=tmp.name, environ={})
    >>> Path(resolver.base()).name
    'service.yml'
    >>> resolver.local_override() is None
    True
    >>> DefaultPathResolver(environ={"service_config_path": "/nowhere.json"}).base()
    '/nowhere.json'
    >>> tmp.cleanup()
    """

    def __init__(
        self,
        *,
        search_dir: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Store the directory to probe and the environment to read.

        Parameters
        ----------
        search_dir:
            Directory holding the default files. Relative paths are resolved
            against the working directory at lookup time. Defaults to ``etc``.
        environ:
            Mapping consulted for path overrides; defaults to :data:`os.environ`.
        """

        self.search_dir = Path(search_dir) if search_dir is not None else Path(DEFAULT_SEARCH_DIR)
        self.env = os.environ if environ is None else environ

    def base(self) -> str | None:
        """Return the base configuration path."""

        return self.resolve(SERVICE_CONFIG_PATH_ENV, BASE_CONFIG_NAME)

    def local_override(self) -> str | None:
        """Return the optional local-override configuration path."""

        return self.resolve(LOCALHOST_CONFIG_PATH_ENV, LOCALHOST_CONFIG_NAME)

    def resolve(self, env_var: str, default_name: str) -> str | None:
        """Return the path configured in *env_var* or the first default that exists.

        The explicit path is returned verbatim without an existence check; the
        loader decides what to do when it is missing.
        """

        explicit = self.env.get(env_var, "")
        if explicit:
            log_debug("path_resolved", layer=default_name, path=explicit, source="env")
            return explicit
        for candidate in self.candidates(default_name):
            if candidate.is_file():
                log_debug("path_resolved", layer=default_name, path=str(candidate), source="search")
                return str(candidate)
        log_debug("path_unresolved", layer=default_name, path=None, search_dir=str(self.search_dir))
        return None

    def candidates(self, default_name: str) -> list[Path]:
        """Return the default paths probed for *default_name*, in order.

        Examples
        --------
        >>> [p.as_posix() for p in DefaultPathResolver(environ={}).candidates("service")]
        ['etc/service.json', 'etc/service.yaml', 'etc/service.yml']
        """

        return [self.search_dir / f"{default_name}{suffix}" for suffix in SEARCH_SUFFIXES]
