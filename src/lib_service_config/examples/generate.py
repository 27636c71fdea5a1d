"""Example configuration asset generation helpers.

Purpose
-------
Produce a sample base file and local-override file in the layout the path
resolver searches by default, so a new service can start from a working
``etc/`` directory.

Contents
    - ``ExampleSpec``: dataclass capturing a relative path and text content.
    - ``generate_examples``: writes every spec under a destination directory.
    - ``_build_specs``: yields the canonical example files.
    - ``_should_write`` / ``_ensure_parent``: tiny filesystem helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from ..adapters.path_resolvers.default import BASE_CONFIG_NAME, DEFAULT_SEARCH_DIR, LOCALHOST_CONFIG_NAME

_BASE_EXAMPLE = """\
# Checked-in defaults shared by every environment.
env: test
service_name: {service_name}
database:
  host_address: 127.0.0.1
  port: "5432"
  name: {service_name}
  user: {service_name}
  password: changeme
http:
  base_url: http://localhost:9876
  host: 0.0.0.0
  port: "9876"
redis:
  host: localhost
  port: "6379"
auth:
  private_key: ""
  public_key: ""
  access_token_expiration_millis: 300000
  refresh_token_expiration_millis: 2592000000
  clean_up_session_millis: 3600000
mail_service:
  api_key: ""
logger:
  config_path: etc/logging.yaml
"""

_LOCALHOST_EXAMPLE = """\
# Developer overrides; keep this file out of version control.
# Only the fields listed here replace values from {base_name}.yaml.
database:
  host_address: localhost
  password: localpassword
"""


@dataclass(slots=True)
class ExampleSpec:
    """Describe a single example file to be written to disk.

    Attributes
    ----------
    relative_path:
        Path relative to the destination directory.
    content:
        File contents (UTF-8 text).
    """

    relative_path: Path
    content: str


def generate_examples(
    destination: str | Path,
    *,
    service_name: str = "service",
    force: bool = False,
) -> list[Path]:
    """Write example base and local-override files under ``destination/etc``.

    Existing files are left alone unless *force* is set. Returns the paths
    written during this call.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> sorted(path.name for path in generate_examples(tmp.name))
    ['localhost_service.yaml', 'service.yaml']
    >>> generate_examples(tmp.name)
    []
    >>> tmp.cleanup()
    """

    dest = Path(destination)
    written: list[Path] = []
    for spec in _build_specs(service_name):
        path = dest / spec.relative_path
        if not _should_write(path, force):
            continue
        _ensure_parent(path)
        path.write_text(spec.content, encoding="utf-8")
        written.append(path)
    return written


def _build_specs(service_name: str) -> Iterator[ExampleSpec]:
    """Yield the canonical example files.

    Examples
    --------
    >>> [spec.relative_path.as_posix() for spec in _build_specs("demo")]
    ['etc/service.yaml', 'etc/localhost_service.yaml']
    """

    root = Path(DEFAULT_SEARCH_DIR)
    yield ExampleSpec(root / f"{BASE_CONFIG_NAME}.yaml", _BASE_EXAMPLE.format(service_name=service_name))
    yield ExampleSpec(
        root / f"{LOCALHOST_CONFIG_NAME}.yaml",
        _LOCALHOST_EXAMPLE.format(base_name=BASE_CONFIG_NAME),
    )


def _should_write(path: Path, force: bool) -> bool:
    """Return ``True`` when *path* should be written respecting *force*."""

    return force or not path.exists()


def _ensure_parent(path: Path) -> None:
    """Create parent directories for *path* when missing."""

    path.parent.mkdir(parents=True, exist_ok=True)
