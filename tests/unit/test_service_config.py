from __future__ import annotations

import dataclasses
import json

import pytest

from lib_service_config import ServiceConfigReader
from lib_service_config.domain.config import (
    AuthConfig,
    DatabaseConfig,
    HTTPServerConfig,
    LoggerConfig,
    MailServiceConfig,
    RedisConfig,
    ServiceConfig,
    SourceInfo,
)


def make_config() -> ServiceConfig:
    return ServiceConfig(
        database=DatabaseConfig(host_address="123.456.789.10", port="5432", name="orders", user="orders", password="123456"),
        http=HTTPServerConfig(base_url="localhost", host="localhost", port="1234"),
        redis=RedisConfig(host="localhost_123", port="1234"),
        auth=AuthConfig(
            private_key="private_key",
            public_key="public_key",
            access_token_expiration_millis=300000,
            refresh_token_expiration_millis=2592000000,
        ),
        mail_service=MailServiceConfig(api_key="api_key"),
        logger=LoggerConfig(config_path="config_path.yml"),
        env="live",
        service_name="orders",
        _meta={"env": SourceInfo(layer="env", path=None, key="env")},
    )


def test_getters_return_sections() -> None:
    config = make_config()
    assert config.get_database_config() == DatabaseConfig(
        host_address="123.456.789.10", port="5432", name="orders", user="orders", password="123456"
    )
    assert config.get_auth_config().refresh_token_expiration_millis == 2592000000
    assert config.get_redis_config() == RedisConfig(host="localhost_123", port="1234")
    assert config.get_mail_service_config().api_key == "api_key"
    assert config.get_http_config().base_url == "localhost"
    assert config.get_server_port() == "1234"
    assert config.get_env() == "live"
    assert config.get_logger_config_path() == "config_path.yml"
    assert config.get_service_name() == "orders"


def test_satisfies_reader_protocol() -> None:
    assert isinstance(make_config(), ServiceConfigReader)


def test_reader_protocol_requires_provenance_and_dict_view() -> None:
    getters = [name for name in dir(ServiceConfig) if name.startswith("get_")]
    GettersOnly = type("GettersOnly", (), {name: getattr(ServiceConfig, name) for name in getters})
    assert len(getters) == 9
    assert not isinstance(GettersOnly(), ServiceConfigReader)


def test_snapshot_is_immutable() -> None:
    config = make_config()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.env = "test"  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.database.host_address = "elsewhere"  # type: ignore[misc]
    with pytest.raises(TypeError):
        config._meta["env"] = {"layer": "base", "path": None, "key": "env"}  # type: ignore[index]


def test_from_mapping_fills_zero_values_and_ignores_unknown_keys() -> None:
    config = ServiceConfig.from_mapping({"redis": {"host": "cache", "db": 3}, "unknown": {"a": 1}})
    assert config.get_redis_config() == RedisConfig(host="cache", port="")
    assert config.get_database_config() == DatabaseConfig()
    assert config.get_auth_config().access_token_expiration_millis == 0
    assert config.get_env() == ""


def test_as_dict_is_a_mutable_copy() -> None:
    config = make_config()
    exported = config.as_dict()
    exported["database"]["host_address"] = "remote"
    assert config.get_database_config().host_address == "123.456.789.10"
    assert set(exported) == {"database", "http", "redis", "auth", "mail_service", "logger", "env", "service_name"}


def test_to_json_round_trips_through_from_mapping() -> None:
    config = make_config()
    rebuilt = ServiceConfig.from_mapping(json.loads(config.to_json()))
    assert rebuilt == config


def test_origin_reports_provenance() -> None:
    config = make_config()
    assert config.origin("env") == {"layer": "env", "path": None, "key": "env"}
    assert config.origin("database.host_address") is None


def test_equality_ignores_provenance() -> None:
    assert ServiceConfig(env="test", _meta={}) == ServiceConfig(
        env="test", _meta={"env": SourceInfo(layer="base", path="etc/service.yml", key="env")}
    )
