"""Structured configuration file loaders.

Purpose
-------
Convert on-disk JSON and YAML documents into payloads shaped exactly like
:data:`lib_service_config.domain.config.SCHEMA`. Both loaders share one
projection step, so equivalent documents produce identical payloads.

Contents
--------
* :class:`BaseFileLoader` – reading, mapping checks and schema projection.
* :class:`JSONFileLoader` – :mod:`json` based loader.
* :class:`YAMLFileLoader` – PyYAML loader that keeps scalars as written.
* :func:`project` – validate and narrow a parsed document onto the schema.

System Role
-----------
Selected by :mod:`lib_service_config.adapters.file_loaders.dispatch` and
invoked by the composition root once per configuration tier.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Final, Mapping

import yaml

from ...domain.config import SCALARS, SCHEMA, UINT32_MAX
from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error

_KEPT_IMPLICIT_TAGS: Final[frozenset[str]] = frozenset({"tag:yaml.org,2002:null", "tag:yaml.org,2002:merge"})
_MAX_DIGITS: Final[int] = len(str(UINT32_MAX))


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    format_name = "structured"
    numeric_text = False

    def load(self, path: str) -> Mapping[str, object]:
        """Return the schema-shaped payload decoded from *path*.

        Raises
        ------
        NotFound
            When *path* does not point at a readable file.
        InvalidFormat
            When the content cannot be parsed or does not fit the schema.
        """

        raw = self._read(path)
        try:
            document = self._parse(raw)
        except InvalidFormat as exc:
            log_error("config_file_invalid", layer="file", path=path, format=self.format_name, error=str(exc))
            raise InvalidFormat(f"Invalid {self.format_name.upper()} in {path}: {exc}") from exc
        try:
            result = project(document, path=path, numeric_text=self.numeric_text)
        except InvalidFormat as exc:
            log_error("config_file_invalid", layer="file", path=path, format=self.format_name, error=str(exc))
            raise
        log_debug("config_file_loaded", layer="file", path=path, format=self.format_name)
        return result

    def _parse(self, raw: bytes) -> object:
        raise NotImplementedError

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when it is missing or unreadable.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile(delete=False)
        >>> _ = tmp.write(b'{"env": "test"}')
        >>> tmp.close()
        >>> BaseFileLoader()._read(tmp.name)[:6]
        b'{"env"'
        >>> Path(tmp.name).unlink()
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Configuration file not found: {path}")
        try:
            payload = file_path.read_bytes()
        except OSError as exc:
            raise NotFound(f"Configuration file not readable: {path}: {exc}") from exc
        log_debug("config_file_read", layer="file", path=path, size=len(payload))
        return payload


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents."""

    format_name = "json"

    def _parse(self, raw: bytes) -> object:
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidFormat(str(exc)) from exc


class _TextScalarLoader(yaml.SafeLoader):
    """Safe loader that resolves only ``null`` and merge keys implicitly.

    Plain scalars such as ``0755``, ``2024-01-01`` or ``no`` stay strings, so
    string fields keep the text exactly as written.
    """


_TextScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag in _KEPT_IMPLICIT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class YAMLFileLoader(BaseFileLoader):
    r"""Load YAML documents, keeping plain scalars as text.

    Examples
    --------
    >>> YAMLFileLoader()._parse(b"database:\n  password: 0755\n  port: 5432\nenv: no\nlogger: ~\n")
    {'database': {'password': '0755', 'port': '5432'}, 'env': 'no', 'logger': None}
    """

    format_name = "yaml"
    numeric_text = True

    def _parse(self, raw: bytes) -> object:
        try:
            data = yaml.load(raw, Loader=_TextScalarLoader)
        except yaml.YAMLError as exc:
            raise InvalidFormat(str(exc)) from exc
        return {} if data is None else data


def project(document: object, *, path: str, numeric_text: bool = False) -> dict[str, Any]:
    """Narrow a parsed *document* onto the configuration schema.

    Unknown keys are dropped and ``null`` values count as absent. Integers are
    accepted for string fields and stringified. Duration fields must be
    integers in the unsigned 32-bit range; with *numeric_text* they may also be
    given as decimal digit strings, which is how plain YAML scalars arrive.
    ``env`` is lowercased.

    Examples
    --------
    >>> project({"http": {"port": 9876, "extra": 1}, "env": "LIVE"}, path="demo")
    {'http': {'port': '9876'}, 'env': 'live'}
    >>> project({"auth": {"access_token_expiration_millis": "300000"}}, path="demo", numeric_text=True)
    {'auth': {'access_token_expiration_millis': 300000}}
    >>> project({"auth": {"access_token_expiration_millis": "soon"}}, path="demo")
    Traceback (most recent call last):
    ...
    lib_service_config.domain.errors.InvalidFormat: demo: auth.access_token_expiration_millis must be an unsigned 32-bit integer, got 'soon'
    """

    if not isinstance(document, Mapping):
        raise InvalidFormat(f"File {path} did not produce a mapping")
    result: dict[str, Any] = {}
    for section, fields in SCHEMA.items():
        values = document.get(section)
        if values is None:
            continue
        if not isinstance(values, Mapping):
            raise InvalidFormat(f"{path}: section {section!r} must be a mapping")
        projected = {
            name: _coerce(values[name], expected, key=f"{section}.{name}", path=path, numeric_text=numeric_text)
            for name, expected in fields.items()
            if values.get(name) is not None
        }
        if projected:
            result[section] = projected
    for name, expected in SCALARS.items():
        if document.get(name) is not None:
            result[name] = _coerce(document[name], expected, key=name, path=path, numeric_text=numeric_text)
    if "env" in result:
        result["env"] = result["env"].lower()
    return result


def _coerce(value: object, expected: type, *, key: str, path: str, numeric_text: bool = False) -> object:
    """Return *value* converted to *expected* or raise :class:`InvalidFormat`."""

    if expected is int:
        if numeric_text and isinstance(value, str) and value.isascii() and value.isdigit():
            if len(value.lstrip("0")) <= _MAX_DIGITS:
                value = int(value)
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= UINT32_MAX:
            return value
        raise InvalidFormat(f"{path}: {key} must be an unsigned 32-bit integer, got {value!r}")
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise InvalidFormat(f"{path}: {key} must be a string, got {value!r}")
