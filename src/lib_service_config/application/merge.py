"""Application-layer override policy.

Purpose
-------
Apply tier payloads (defaults, base file, local-override file, environment)
onto a single working payload, field by field, while tracking which tier
supplied each value. Free of I/O so the core can validate between tiers.

Contents
    - ``overlay``: applies one tier onto an existing payload in place.
    - ``_merge_mapping`` / ``_set_scalar``: recursive helpers that keep the
      provenance bookkeeping in one place.

System Role
-----------
:mod:`lib_service_config.core` calls :func:`overlay` once per tier in
precedence order, so a later tier overwrites only the fields it actually
specifies and sibling fields from earlier tiers survive.
"""

from __future__ import annotations

from collections.abc import Mapping


def overlay(
    target: dict[str, object],
    meta: dict[str, dict[str, object]],
    payload: Mapping[str, object],
    layer: str,
    path: str | None,
) -> None:
    """Overwrite fields of *target* with those present in *payload*.

    Nested mappings merge recursively; an empty or missing section leaves the
    existing section untouched.

    Examples
    --------
    >>> payload: dict[str, object] = {}
    >>> meta: dict[str, dict[str, object]] = {}
    >>> overlay(payload, meta, {"database": {"host_address": "10.0.0.1", "port": "5432"}}, "base", "etc/service.yml")
    >>> overlay(payload, meta, {"database": {"host_address": "localhost"}}, "local_override", None)
    >>> payload["database"]
    {'host_address': 'localhost', 'port': '5432'}
    >>> meta["database.port"]["layer"], meta["database.host_address"]["layer"]
    ('base', 'local_override')
    """

    _merge_mapping(target, meta, payload, layer, path, [])


def _merge_mapping(
    target: dict[str, object],
    meta: dict[str, dict[str, object]],
    incoming: Mapping[str, object],
    layer: str,
    path: str | None,
    segments: list[str],
) -> None:
    for key, value in incoming.items():
        dotted = ".".join([*segments, key])
        if isinstance(value, Mapping):
            existing = target.get(key)
            container: dict[str, object] = dict(existing) if isinstance(existing, Mapping) else {}
            _merge_mapping(container, meta, value, layer, path, [*segments, key])
            if container or isinstance(existing, Mapping):
                target[key] = container
        else:
            _set_scalar(target, meta, key, value, dotted, layer, path)


def _set_scalar(
    target: dict[str, object],
    meta: dict[str, dict[str, object]],
    key: str,
    value: object,
    dotted: str,
    layer: str,
    path: str | None,
) -> None:
    """Assign a scalar value and record its provenance under ``dotted``."""

    target[key] = value
    meta[dotted] = {"layer": layer, "path": path, "key": dotted}
