from __future__ import annotations

import pytest

from escrud.connection_settings import DEFAULT_INDEX, ConnectionConfig, load_config

_ENV_VARS = (
    "ELASTIC",
    "ELASTIC_HOST",
    "ELASTIC_PORT",
    "ELASTIC_USER",
    "ELASTIC_PASSWORD",
    "ELASTIC_USE_SSL",
    "ELASTIC_VERIFY_CERTS",
    "ELASTIC_CA_CERTS",
    "ELASTIC_TIMEOUT",
    "ELASTIC_MAX_RETRIES",
    "ELASTIC_RETRY_ON_TIMEOUT",
    "ELASTIC_HTTP_COMPRESS",
    "ELASTIC_INDEX",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    cfg = load_config()

    assert cfg.hosts == [{"host": "localhost", "port": 9200, "scheme": "http"}]
    assert cfg.http_auth is None
    assert cfg.index == DEFAULT_INDEX == "gl"
    assert cfg.max_retries == 0


def test_load_config_env_parsing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ELASTIC_HOST", "example.com")
    monkeypatch.setenv("ELASTIC_PORT", "443")
    monkeypatch.setenv("ELASTIC_USER", "u")
    monkeypatch.setenv("ELASTIC_PASSWORD", "p")
    monkeypatch.setenv("ELASTIC_USE_SSL", "yes")
    monkeypatch.setenv("ELASTIC_VERIFY_CERTS", "no")
    monkeypatch.setenv("ELASTIC_RETRY_ON_TIMEOUT", "on")
    monkeypatch.setenv("ELASTIC_HTTP_COMPRESS", "off")
    monkeypatch.setenv("ELASTIC_TIMEOUT", "99")
    monkeypatch.setenv("ELASTIC_MAX_RETRIES", "5")
    monkeypatch.setenv("ELASTIC_INDEX", "articles")

    cfg = load_config()

    assert cfg.host == "example.com"
    assert cfg.port == 443
    assert cfg.http_auth == ("u", "p")
    assert cfg.use_ssl is True
    assert cfg.verify_certs is False
    assert cfg.retry_on_timeout is True
    assert cfg.http_compress is False
    assert cfg.timeout == 99
    assert cfg.max_retries == 5
    assert cfg.index == "articles"


def test_bare_elastic_var_sets_host(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ELASTIC", "es.internal")
    assert load_config().host == "es.internal"

    monkeypatch.setenv("ELASTIC_HOST", "preferred.internal")
    assert load_config().host == "preferred.internal"


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ELASTIC_INDEX", "from-env")
    assert load_config(index="explicit").index == "explicit"


def test_invalid_bool_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ELASTIC_USE_SSL", "maybe")
    with pytest.raises(ValueError):
        load_config()


def test_unknown_override_key_raises() -> None:
    with pytest.raises(TypeError):
        load_config(not_a_real_key=True)


def test_hosts_property_uses_scheme() -> None:
    cfg = ConnectionConfig(host="localhost", port=9200, use_ssl=True)
    assert cfg.hosts == [{"host": "localhost", "port": 9200, "scheme": "https"}]


def test_empty_env_values_keep_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ELASTIC_PORT", "")
    monkeypatch.setenv("ELASTIC_INDEX", "")

    cfg = load_config()

    assert cfg.port == 9200
    assert cfg.index == DEFAULT_INDEX


def test_empty_bool_env_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ELASTIC_HTTP_COMPRESS", "")
    with pytest.raises(ValueError):
        load_config()
