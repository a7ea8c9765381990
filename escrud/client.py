"""Client factory for Elasticsearch / OpenSearch connections."""

import logging
from typing import Optional

from opensearchpy import OpenSearch

from .connection_settings import ConnectionConfig, load_config

logger = logging.getLogger(__name__)


def create_client(
    config: Optional[ConnectionConfig] = None,
    **overrides,
) -> OpenSearch:
    """Create and return a client handle.

    Args:
        config: An explicit :class:`ConnectionConfig`.  When ``None``,
            one is built via :func:`load_config` (env vars + *overrides*).
        **overrides: Passed to :func:`load_config` when *config* is ``None``.

    Returns:
        A configured OpenSearch client instance.  No request is sent.
    """
    if config is None:
        config = load_config(**overrides)

    kwargs: dict = {
        "hosts": config.hosts,
        "use_ssl": config.use_ssl,
        "verify_certs": config.verify_certs,
        "ssl_show_warn": config.ssl_show_warn,
        "timeout": config.timeout,
        "max_retries": config.max_retries,
        "retry_on_timeout": config.retry_on_timeout,
        "http_compress": config.http_compress,
    }

    http_auth = config.http_auth
    if http_auth:
        kwargs["http_auth"] = http_auth

    if config.ca_certs:
        kwargs["ca_certs"] = config.ca_certs

    return OpenSearch(**kwargs)


def connect(
    config: Optional[ConnectionConfig] = None,
    **overrides,
) -> OpenSearch:
    """Create a client and check that the cluster answers.

    Unlike :func:`create_client` this sends ``info()`` once and logs the
    server version.  Any client error is re-raised after logging.
    """
    if config is None:
        config = load_config(**overrides)

    client = create_client(config)
    try:
        info = client.info()
    except Exception:
        logger.error(
            "Cannot get server info from %s:%d, check cluster health",
            config.host,
            config.port,
        )
        raise

    version = info.get("version", {})
    logger.info(
        "Connected to %s (%s %s)",
        info.get("cluster_name", "unknown cluster"),
        version.get("distribution", "elasticsearch"),
        version.get("number", "?"),
    )
    return client
