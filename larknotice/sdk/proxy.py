"""Proxy selection for outbound webhook clients."""

import ssl
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urlparse

import httpx

Transport = Union[httpx.HTTPTransport, httpx.AsyncHTTPTransport]


def _normalize_host(host: str) -> str:
    host = host.strip().lower()
    if host.startswith("."):
        host = f"*{host}"
    return host


def _host_matches(host: str, pattern: str) -> bool:
    if pattern.startswith("*."):
        return host.endswith(pattern[1:])
    return host == pattern


@dataclass(frozen=True)
class ProxySelector:
    """
    Decides which proxy (if any) carries a request.

    ``proxy_url=None`` means direct connections. Hosts in ``no_proxy_hosts``
    always bypass the proxy; entries may be exact hostnames or ``*.domain``
    (or ``.domain``) suffix patterns.
    """
    proxy_url: Optional[str] = None
    no_proxy_hosts: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(
            self,
            "no_proxy_hosts",
            tuple(_normalize_host(h) for h in self.no_proxy_hosts if h and h.strip()),
        )

    @classmethod
    def from_url(cls, proxy_url: Optional[str], no_proxy: str = "") -> "ProxySelector":
        """Build a selector from a proxy URL and a comma-separated no-proxy list."""
        hosts = tuple(h for h in no_proxy.split(",") if h.strip())
        return cls(proxy_url=proxy_url or None, no_proxy_hosts=hosts)

    @classmethod
    def direct(cls) -> "ProxySelector":
        return cls()

    def select(self, url: str) -> Optional[str]:
        """Return the proxy URL to use for ``url``, or None for a direct connection."""
        if not self.proxy_url:
            return None
        host = (urlparse(url).hostname or "").lower()
        if any(_host_matches(host, pattern) for pattern in self.no_proxy_hosts):
            return None
        return self.proxy_url

    def mounts(
        self,
        ssl_context: ssl.SSLContext,
        transport_cls: type = httpx.HTTPTransport,
    ) -> dict[str, Optional[Transport]]:
        """
        Build httpx mount patterns for this selector.

        A ``None`` mount routes through the client's own (direct) transport.
        """
        if not self.proxy_url:
            return {}

        mounts: dict[str, Optional[Transport]] = {
            "all://": transport_cls(
                verify=ssl_context,
                http1=True,
                http2=False,
                proxy=self.proxy_url,
            ),
        }
        for host in self.no_proxy_hosts:
            mounts[f"all://{host}"] = None
        return mounts
