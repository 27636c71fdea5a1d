"""Environment variable adapter.

Purpose
-------
Translate the fixed table of override variables into a schema-shaped payload.
It forms the final, highest-precedence tier of the resolution.

Key behaviours
--------------
* Only variables listed in :data:`ENV_OVERRIDES` are consulted; unset and
  empty variables are skipped.
* String fields are copied verbatim (``ENV`` is lowercased).
* Duration fields accept an optionally signed decimal integer. Values that do
  not parse, equal zero, or fall outside the unsigned 32-bit range are ignored
  and the previously resolved value stays in place.
* Nothing is validated after this tier; an out-of-range ``PORT`` passes.
"""

from __future__ import annotations

import os
import re
from typing import Final, Mapping, NamedTuple

from ...domain.config import UINT32_MAX
from ...observability import log_debug

_INTEGER: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
_MAX_DIGITS: Final[int] = len(str(UINT32_MAX))


class EnvOverride(NamedTuple):
    """One row of the override table."""

    variable: str
    key: str
    numeric: bool = False


ENV_OVERRIDES: Final[tuple[EnvOverride, ...]] = (
    EnvOverride("SERVICE_NAME", "service_name"),
    EnvOverride("ENV", "env"),
    EnvOverride("PORT", "http.port"),
    EnvOverride("REDIS_HOST", "redis.host"),
    EnvOverride("REDIS_PORT", "redis.port"),
    EnvOverride("DB_HOST", "database.host_address"),
    EnvOverride("DB_PORT", "database.port"),
    EnvOverride("DB_USERNAME", "database.user"),
    EnvOverride("DB_PASSWORD", "database.password"),
    EnvOverride("LOGIN_PRIVATE_KEY", "auth.private_key"),
    EnvOverride("LOGIN_PUBLIC_KEY", "auth.public_key"),
    EnvOverride("ACCESS_TOKEN_EXPIRATION_MILLIS", "auth.access_token_expiration_millis", numeric=True),
    EnvOverride("REFRESH_TOKEN_EXPIRATION_MILLIS", "auth.refresh_token_expiration_millis", numeric=True),
)


class DefaultEnvLoader:
    """Collect overrides from the process environment."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        """

        self._environ = os.environ if environ is None else environ

    def load(self) -> dict[str, object]:
        """Return a nested mapping of the overrides that apply.

        Examples
        --------
        >>> env = {
        ...     'ENV': 'LIVE',
        ...     'DB_HOST': 'db.internal',
        ...     'ACCESS_TOKEN_EXPIRATION_MILLIS': '60000',
        ...     'REFRESH_TOKEN_EXPIRATION_MILLIS': '0',
        ... }
        >>> payload = DefaultEnvLoader(environ=env).load()
        >>> payload['env'], payload['database']['host_address']
        ('live', 'db.internal')
        >>> payload['auth']
        {'access_token_expiration_millis': 60000}
        """

        collected: dict[str, object] = {}
        for override in ENV_OVERRIDES:
            raw = self._environ.get(override.variable, "")
            if not raw:
                continue
            if override.numeric:
                value: object | None = parse_millis(raw)
                if value is None:
                    log_debug("env_override_ignored", layer="env", path=None, variable=override.variable)
                    continue
            elif override.key == "env":
                value = raw.lower()
            else:
                value = raw
            assign_nested(collected, override.key, value)
        log_debug("env_overrides_applied", layer="env", path=None, keys=sorted(collected.keys()))
        return collected


def parse_millis(raw: str) -> int | None:
    """Return *raw* as a non-zero unsigned 32-bit integer, or ``None``.

    Examples
    --------
    >>> parse_millis('300000'), parse_millis('+15')
    (300000, 15)
    >>> parse_millis('0'), parse_millis('soon'), parse_millis('-5'), parse_millis('4294967296')
    (None, None, None, None)
    >>> parse_millis("9" * 5000) is None
    True
    """

    if not _INTEGER.fullmatch(raw):
        return None
    if len(raw.lstrip("+-").lstrip("0")) > _MAX_DIGITS:
        return None
    value = int(raw)
    if not 0 < value <= UINT32_MAX:
        return None
    return value


def assign_nested(target: dict[str, object], key: str, value: object) -> None:
    """Assign ``value`` inside ``target`` using ``.`` as the nesting delimiter.

    Examples
    --------
    >>> data: dict[str, object] = {}
    >>> assign_nested(data, 'redis.port', '6380')
    >>> data
    {'redis': {'port': '6380'}}
    """

    *parents, leaf = key.split(".")
    cursor = target
    for part in parents:
        child = cursor.setdefault(part, {})
        if not isinstance(child, dict):
            raise ValueError(f"Cannot override scalar with mapping for key {key}")
        cursor = child
    cursor[leaf] = value
