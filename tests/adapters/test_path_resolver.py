"""Path resolver tests covering explicit paths and the default search order."""

from __future__ import annotations

from pathlib import Path

from lib_service_config.adapters.path_resolvers.default import (
    LOCALHOST_CONFIG_PATH_ENV,
    SERVICE_CONFIG_PATH_ENV,
    DefaultPathResolver,
)


def touch(path: Path) -> Path:
    path.write_text("{}", encoding="utf-8")
    return path


def test_explicit_path_is_returned_verbatim_without_existence_check(etc_dir: Path) -> None:
    resolver = DefaultPathResolver(search_dir=etc_dir, environ={SERVICE_CONFIG_PATH_ENV: "./missing/service.yml"})
    assert resolver.base() == "./missing/service.yml"


def test_empty_explicit_path_falls_back_to_search(etc_dir: Path) -> None:
    expected = touch(etc_dir / "service.yaml")
    resolver = DefaultPathResolver(search_dir=etc_dir, environ={SERVICE_CONFIG_PATH_ENV: ""})
    assert resolver.base() == str(expected)


def test_search_order_prefers_json_then_yaml_then_yml(etc_dir: Path) -> None:
    resolver = DefaultPathResolver(search_dir=etc_dir, environ={})
    yml = touch(etc_dir / "service.yml")
    assert resolver.base() == str(yml)
    yaml_file = touch(etc_dir / "service.yaml")
    assert resolver.base() == str(yaml_file)
    json_file = touch(etc_dir / "service.json")
    assert resolver.base() == str(json_file)


def test_nothing_found_returns_none(etc_dir: Path) -> None:
    resolver = DefaultPathResolver(search_dir=etc_dir, environ={})
    assert resolver.base() is None
    assert resolver.local_override() is None


def test_directories_are_not_configuration_files(etc_dir: Path) -> None:
    (etc_dir / "service.json").mkdir()
    resolver = DefaultPathResolver(search_dir=etc_dir, environ={})
    assert resolver.base() is None


def test_slots_use_their_own_variables_and_names(etc_dir: Path) -> None:
    local = touch(etc_dir / "localhost_service.yml")
    resolver = DefaultPathResolver(search_dir=etc_dir, environ={LOCALHOST_CONFIG_PATH_ENV: ""})
    assert resolver.base() is None
    assert resolver.local_override() == str(local)

    resolver = DefaultPathResolver(search_dir=etc_dir, environ={LOCALHOST_CONFIG_PATH_ENV: "/srv/local.json"})
    assert resolver.local_override() == "/srv/local.json"


def test_default_search_dir_is_relative_etc(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "etc").mkdir()
    touch(tmp_path / "etc" / "service.json")
    resolver = DefaultPathResolver(environ={})
    assert Path(resolver.base()).as_posix() == "etc/service.json"
