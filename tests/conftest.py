from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from lib_service_config.adapters.env.default import ENV_OVERRIDES
from lib_service_config.adapters.path_resolvers.default import LOCALHOST_CONFIG_PATH_ENV, SERVICE_CONFIG_PATH_ENV
from lib_service_config.core import get_service_config

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture()
def fixtures_dir() -> Path:
    """Directory holding the sample base and local-override files."""

    return FIXTURES


@pytest.fixture()
def etc_dir(tmp_path: Path) -> Path:
    """Empty ``etc`` directory used as the resolver's search directory."""

    target = tmp_path / "etc"
    target.mkdir()
    return target


@pytest.fixture()
def install_fixture(etc_dir: Path):
    """Copy a fixture file into ``etc_dir`` under an optional new name."""

    def _install(name: str, target_name: str | None = None) -> Path:
        destination = etc_dir / (target_name or name)
        shutil.copyfile(FIXTURES / name, destination)
        return destination

    return _install


@pytest.fixture()
def clean_environment(monkeypatch: pytest.MonkeyPatch):
    """Keep the host environment from leaking into resolution tests."""

    for override in ENV_OVERRIDES:
        monkeypatch.delenv(override.variable, raising=False)
    monkeypatch.delenv(SERVICE_CONFIG_PATH_ENV, raising=False)
    monkeypatch.delenv(LOCALHOST_CONFIG_PATH_ENV, raising=False)
    get_service_config.cache_clear()
    yield
    get_service_config.cache_clear()
