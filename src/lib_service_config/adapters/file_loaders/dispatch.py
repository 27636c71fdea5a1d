"""Suffix-based selection of a file loader."""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping

from ...application.ports import FileLoader
from .structured import JSONFileLoader, YAMLFileLoader

#: Loaders keyed by the text after the final dot of a path.
FILE_LOADERS: Final[Mapping[str, FileLoader]] = MappingProxyType(
    {
        "json": JSONFileLoader(),
        "yaml": YAMLFileLoader(),
        "yml": YAMLFileLoader(),
    }
)


def get_suffix(path: str) -> str:
    """Return the text after the last ``.`` in *path*.

    Examples
    --------
    >>> get_suffix("a/b/service.yml"), get_suffix("nam.json")
    ('yml', 'json')
    >>> get_suffix("etc/service.local.yaml")
    'yaml'
    >>> get_suffix("service")
    'service'
    """

    return path.rsplit(".", 1)[-1]


def loader_for(path: str) -> FileLoader | None:
    """Return the loader registered for the suffix of *path*, or ``None``.

    Suffix matching is case-sensitive; an unknown suffix means the file is
    skipped.

    Examples
    --------
    >>> type(loader_for("etc/service.yaml")).__name__
    'YAMLFileLoader'
    >>> loader_for("etc/service.toml") is None
    True
    """

    return FILE_LOADERS.get(get_suffix(path))
