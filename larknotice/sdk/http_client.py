"""
Factory for outbound HTTP clients used to deliver card notifications.

Every client speaks HTTP/1.1, follows standard redirects and gives up on
establishing a connection after ``CONNECT_TIMEOUT`` seconds. Certificate
validation is on unless the caller explicitly asks to bypass it, which is
only meant for test servers with self-signed certificates.
"""

import logging
import ssl
from typing import Optional

import certifi
import httpx

from larknotice.sdk.proxy import ProxySelector
from larknotice.sdk.trust import BypassingTrustManager, TrustManager

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 10.0


class HttpClientBuildError(RuntimeError):
    """Raised when an HTTP client cannot be constructed (broken SSL runtime, bad proxy)."""


def create_ssl_context(bypass_ssl_validation: bool = False) -> ssl.SSLContext:
    """
    Create the SSL context for a client.

    The context starts from the default TLS client settings with the certifi
    CA bundle. When ``bypass_ssl_validation`` is True a BypassingTrustManager
    is installed, so any certificate chain from any peer is accepted.
    """
    context = ssl.create_default_context(cafile=certifi.where())
    trust_managers: list[TrustManager] = [BypassingTrustManager()] if bypass_ssl_validation else []
    for trust_manager in trust_managers:
        trust_manager.install(context)
    return context


def _client_options(
    proxy_selector: Optional[ProxySelector],
    bypass_ssl_validation: bool,
    transport_cls: type,
) -> dict:
    ssl_context = create_ssl_context(bypass_ssl_validation)
    options = {
        "verify": ssl_context,
        "http1": True,
        "http2": False,
        "follow_redirects": True,
        "timeout": httpx.Timeout(None, connect=CONNECT_TIMEOUT),
    }
    if proxy_selector is None:
        # Fall back to the process-wide proxy settings (HTTP_PROXY, NO_PROXY, ...)
        options["trust_env"] = True
    else:
        options["trust_env"] = False
        options["mounts"] = proxy_selector.mounts(ssl_context, transport_cls)
    return options


def _warn_bypass(bypass_ssl_validation: bool) -> None:
    if bypass_ssl_validation:
        logger.warning(
            "SSL certificate validation is disabled for this HTTP client; "
            "use only in test environments"
        )


def build_http_client(
    proxy_selector: Optional[ProxySelector] = None,
    bypass_ssl_validation: bool = False,
) -> httpx.Client:
    """
    Build a synchronous HTTP client.

    Args:
        proxy_selector: Proxy routing, or None to use the system proxy settings.
        bypass_ssl_validation: True to accept any server certificate. Never
            enable this in production.

    Raises:
        HttpClientBuildError: if the SSL context or transports cannot be created, for any reason.
    """
    try:
        client = httpx.Client(
            **_client_options(proxy_selector, bypass_ssl_validation, httpx.HTTPTransport)
        )
    except Exception as e:
        raise HttpClientBuildError("Failed to create HttpClient") from e

    _warn_bypass(bypass_ssl_validation)
    return client


def build_async_http_client(
    proxy_selector: Optional[ProxySelector] = None,
    bypass_ssl_validation: bool = False,
) -> httpx.AsyncClient:
    """Async counterpart of build_http_client with the same configuration."""
    try:
        client = httpx.AsyncClient(
            **_client_options(proxy_selector, bypass_ssl_validation, httpx.AsyncHTTPTransport)
        )
    except Exception as e:
        raise HttpClientBuildError("Failed to create AsyncHttpClient") from e

    _warn_bypass(bypass_ssl_validation)
    return client
