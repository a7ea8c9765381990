"""Cluster address, client pass-through options and the default index.

``load_config()`` layers dataclass defaults, ``ELASTIC_*`` environment
variables and keyword overrides, later layers winning.  Retry and auth
options only reach the client; escrud never retries on its own.
"""

import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

DEFAULT_INDEX = "gl"

_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off"}


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized not in _TRUE | _FALSE:
        raise ValueError(f"Invalid boolean value: {value!r}")
    return normalized in _TRUE


@dataclass
class ConnectionConfig:
    host: str = "localhost"
    port: int = 9200
    user: str = ""
    password: str = ""
    use_ssl: bool = False
    verify_certs: bool = False
    ssl_show_warn: bool = False
    ca_certs: Optional[str] = None
    timeout: int = 30
    max_retries: int = 0
    retry_on_timeout: bool = False
    http_compress: bool = False
    index: str = DEFAULT_INDEX

    @property
    def http_auth(self) -> Optional[tuple[str, str]]:
        """Basic auth pair, or ``None`` unless both user and password are set."""
        return (self.user, self.password) if self.user and self.password else None

    @property
    def hosts(self) -> list[dict]:
        return [
            {
                "host": self.host,
                "port": self.port,
                "scheme": "https" if self.use_ssl else "http",
            }
        ]


# (environment variable, config attribute, parser).  Empty values are
# skipped for non-boolean settings.
_ENV_SETTINGS: tuple[tuple[str, str, Callable[[str], Any]], ...] = (
    ("ELASTIC_HOST", "host", str),
    ("ELASTIC_PORT", "port", int),
    ("ELASTIC_USER", "user", str),
    ("ELASTIC_PASSWORD", "password", str),
    ("ELASTIC_USE_SSL", "use_ssl", _parse_bool),
    ("ELASTIC_VERIFY_CERTS", "verify_certs", _parse_bool),
    ("ELASTIC_CA_CERTS", "ca_certs", str),
    ("ELASTIC_TIMEOUT", "timeout", int),
    ("ELASTIC_MAX_RETRIES", "max_retries", int),
    ("ELASTIC_RETRY_ON_TIMEOUT", "retry_on_timeout", _parse_bool),
    ("ELASTIC_HTTP_COMPRESS", "http_compress", _parse_bool),
    ("ELASTIC_INDEX", "index", str),
)


def load_config(**overrides) -> ConnectionConfig:
    """Build a ConnectionConfig from defaults, the environment and *overrides*.

    A bare ``ELASTIC`` variable is read as the host when ``ELASTIC_HOST``
    is unset.  Unknown override keys raise ``TypeError``; malformed
    booleans raise ``ValueError``.
    """
    cfg = ConnectionConfig()

    legacy_host = os.getenv("ELASTIC")
    if legacy_host:
        cfg.host = legacy_host

    for env_name, attr, parse in _ENV_SETTINGS:
        raw = os.getenv(env_name)
        if raw is None or (raw == "" and parse is not _parse_bool):
            continue
        setattr(cfg, attr, parse(raw))

    for key, value in overrides.items():
        if not hasattr(cfg, key):
            raise TypeError(f"Unknown config key: {key!r}")
        setattr(cfg, key, value)

    return cfg
