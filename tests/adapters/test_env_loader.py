"""Environment overlay tests.

String variables copy verbatim; duration variables only apply when they parse
as a non-zero unsigned 32-bit integer.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_service_config.adapters.env.default import ENV_OVERRIDES, DefaultEnvLoader, assign_nested, parse_millis


def test_full_override_table() -> None:
    environ = {
        "SERVICE_NAME": "orders",
        "ENV": "LIVE",
        "PORT": "8080",
        "REDIS_HOST": "redis.internal",
        "REDIS_PORT": "6380",
        "DB_HOST": "db.internal",
        "DB_PORT": "5433",
        "DB_USERNAME": "svc",
        "DB_PASSWORD": "s3cret",
        "LOGIN_PRIVATE_KEY": "priv",
        "LOGIN_PUBLIC_KEY": "pub",
        "ACCESS_TOKEN_EXPIRATION_MILLIS": "60000",
        "REFRESH_TOKEN_EXPIRATION_MILLIS": "120000",
        "UNRELATED": "ignored",
    }
    payload = DefaultEnvLoader(environ=environ).load()
    assert payload == {
        "service_name": "orders",
        "env": "live",
        "http": {"port": "8080"},
        "redis": {"host": "redis.internal", "port": "6380"},
        "database": {"host_address": "db.internal", "port": "5433", "user": "svc", "password": "s3cret"},
        "auth": {
            "private_key": "priv",
            "public_key": "pub",
            "access_token_expiration_millis": 60000,
            "refresh_token_expiration_millis": 120000,
        },
    }


def test_empty_variables_are_skipped() -> None:
    payload = DefaultEnvLoader(environ={"DB_HOST": "", "PORT": ""}).load()
    assert payload == {}


def test_port_is_not_validated() -> None:
    payload = DefaultEnvLoader(environ={"PORT": "99999"}).load()
    assert payload == {"http": {"port": "99999"}}


@pytest.mark.parametrize("raw", ["0", "000", "soon", "12ms", "1.5", " 10", "-5", "4294967296", "1_000", "9" * 5000])
def test_invalid_numeric_overrides_are_ignored(raw: str) -> None:
    payload = DefaultEnvLoader(environ={"ACCESS_TOKEN_EXPIRATION_MILLIS": raw}).load()
    assert payload == {}


@pytest.mark.usefixtures("clean_environment")
def test_reads_os_environ_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REDIS_HOST", "from-os")
    assert DefaultEnvLoader().load() == {"redis": {"host": "from-os"}}


def test_assign_nested_refuses_to_replace_scalar() -> None:
    container: dict[str, object] = {"auth": "flat"}
    with pytest.raises(ValueError):
        assign_nested(container, "auth.private_key", "priv")


def test_every_variable_targets_a_distinct_field() -> None:
    keys = [override.key for override in ENV_OVERRIDES]
    assert len(keys) == len(set(keys))


@given(st.integers(min_value=1, max_value=2**32 - 1))
def test_parse_millis_accepts_uint32_range(value: int) -> None:
    assert parse_millis(str(value)) == value


@given(st.text(min_size=1, max_size=8).filter(lambda text: not (text.isascii() and text.lstrip("+").isdigit())))
def test_parse_millis_ignores_non_numeric_text(raw: str) -> None:
    assert parse_millis(raw) is None


def test_leading_zeros_do_not_count_against_the_digit_limit() -> None:
    assert parse_millis("0000000000060000") == 60000
    assert parse_millis("99999999999") is None
