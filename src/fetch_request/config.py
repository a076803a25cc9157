"""
Configuration for fetch_request.

Holds the timeout/client dataclasses, the default JSON serializer and the
process-wide default httpx client. The default client is created lazily from
a ClientConfig and can be replaced wholesale (e.g. in tests) with
set_default_client(). Callers must treat it as read-only: per-request
transport overrides never mutate it.
"""
import json
import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

import httpx

logger = logging.getLogger("fetch_request.config")

TRACE_ENV_VAR = "FETCH_REQUEST_TRACE"


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


@dataclass
class ClientConfig:
    """Configuration used to build an httpx.Client."""

    timeout: Union[TimeoutConfig, float, None] = None
    headers: Dict[str, str] = field(default_factory=dict)
    follow_redirects: bool = True
    max_redirects: int = 10
    verify: Optional[bool] = None


# Default values
DEFAULT_TIMEOUT = TimeoutConfig()


class DefaultSerializer:
    """Default JSON serializer."""

    def serialize(self, data: Any) -> str:
        """Serialize data to JSON string."""
        return json.dumps(data)

    def deserialize(self, text: str) -> Any:
        """Deserialize JSON string to data."""
        return json.loads(text)


default_serializer = DefaultSerializer()


def _is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    node_tls = os.environ.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = os.environ.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


def is_trace_enabled_by_env() -> bool:
    """Check if request tracing is switched on via FETCH_REQUEST_TRACE."""
    return os.environ.get(TRACE_ENV_VAR, "").lower() in ("1", "true", "yes", "on")


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def to_httpx_timeout(timeout: Union[TimeoutConfig, float, None]) -> httpx.Timeout:
    """Convert a timeout config into an httpx.Timeout."""
    resolved = normalize_timeout(timeout)
    return httpx.Timeout(
        connect=resolved.connect,
        read=resolved.read,
        write=resolved.write,
        pool=resolved.connect,
    )


def create_client(config: Optional[ClientConfig] = None) -> httpx.Client:
    """
    Create an httpx.Client from a ClientConfig.

    Args:
        config: Client configuration. Defaults to ClientConfig().

    Returns:
        A new httpx.Client. The caller owns it and must close it.
    """
    config = config or ClientConfig()
    if config.verify is not None:
        verify_ssl = config.verify
    else:
        # NODE_TLS_REJECT_UNAUTHORIZED=0 or SSL_CERT_VERIFY=0 will disable SSL verification
        verify_ssl = not _is_ssl_verify_disabled_by_env()

    logger.debug(
        f"create_client: verify={verify_ssl}, follow_redirects={config.follow_redirects}, "
        f"max_redirects={config.max_redirects}"
    )
    return httpx.Client(
        timeout=to_httpx_timeout(config.timeout),
        headers=dict(config.headers),
        follow_redirects=config.follow_redirects,
        max_redirects=config.max_redirects,
        verify=verify_ssl,
    )


_default_client: Optional[httpx.Client] = None
_default_client_lock = threading.Lock()


def get_default_client() -> httpx.Client:
    """Return the shared default client, creating it on first use."""
    global _default_client
    with _default_client_lock:
        if _default_client is None:
            logger.debug("get_default_client: creating default client")
            _default_client = create_client()
        return _default_client


def set_default_client(client: Optional[httpx.Client]) -> Optional[httpx.Client]:
    """
    Replace the shared default client.

    The previous client is returned, not closed, so callers can restore it.
    Passing None makes the next get_default_client() call build a fresh one.
    """
    global _default_client
    with _default_client_lock:
        previous = _default_client
        _default_client = client
    return previous


def reset_default_client() -> None:
    """Close and forget the shared default client."""
    previous = set_default_client(None)
    if previous is not None:
        previous.close()
