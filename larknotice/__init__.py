"""Lark/Feishu build notifications delivered as interactive cards."""

from larknotice.sdk import Card, SendResult
from larknotice.sdk.http_client import (
    CONNECT_TIMEOUT,
    HttpClientBuildError,
    build_async_http_client,
    build_http_client,
)
from larknotice.sdk.proxy import ProxySelector

__version__ = "0.1.0"

__all__ = [
    "CONNECT_TIMEOUT",
    "Card",
    "HttpClientBuildError",
    "ProxySelector",
    "SendResult",
    "build_async_http_client",
    "build_http_client",
]
