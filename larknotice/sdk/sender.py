"""Deliver cards to Lark/Feishu bot webhooks."""

import logging
from typing import Optional
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel, Field, ValidationError

from larknotice.config import Settings, settings
from larknotice.sdk import Card, SendResult
from larknotice.sdk.http_client import CONNECT_TIMEOUT, build_async_http_client, build_http_client
from larknotice.sdk.proxy import ProxySelector

logger = logging.getLogger(__name__)


class LarkResponse(BaseModel):
    """Webhook reply body. Older bot endpoints answer with StatusCode/StatusMessage."""
    code: Optional[int] = None
    msg: Optional[str] = None
    legacy_code: Optional[int] = Field(None, alias="StatusCode")
    legacy_msg: Optional[str] = Field(None, alias="StatusMessage")

    model_config = {"extra": "ignore", "populate_by_name": True}

    @property
    def result_code(self) -> Optional[int]:
        return self.code if self.code is not None else self.legacy_code

    @property
    def result_message(self) -> str:
        return self.msg or self.legacy_msg or ""


def build_envelope(card: Card) -> dict:
    """Wrap a card in the interactive message envelope."""
    return {"msg_type": "interactive", "card": card.to_dict()}


def parse_response(response: httpx.Response) -> SendResult:
    """Turn a webhook HTTP response into a SendResult."""
    try:
        body = LarkResponse.model_validate_json(response.content)
    except ValidationError:
        return SendResult(
            ok=False,
            status_code=response.status_code,
            message=response.text[:200],
        )

    code = body.result_code
    return SendResult(
        ok=response.status_code < 400 and code in (None, 0),
        status_code=response.status_code,
        code=code,
        message=body.result_message or response.text[:200],
    )


def proxy_selector_from_settings(config: Settings) -> Optional[ProxySelector]:
    """Explicit proxy from settings, or None to defer to the environment."""
    if not config.proxy_url:
        return None
    return ProxySelector.from_url(config.proxy_url, config.no_proxy_hosts)


def _target(webhook_url: str) -> str:
    # Bot hook paths embed the access token; only log the host.
    try:
        return urlparse(webhook_url).netloc or "<invalid url>"
    except ValueError:
        return "<invalid url>"


def _log_result(webhook_url: str, result: SendResult) -> None:
    if result.ok:
        logger.debug(f"Successfully sent card to {_target(webhook_url)}")
    else:
        logger.warning(
            f"Webhook {_target(webhook_url)} rejected card: "
            f"status={result.status_code} code={result.code} message={result.message}"
        )


class CardSender:
    """Send cards through a synchronous httpx client."""

    def __init__(self, client: httpx.Client, request_timeout: float = 15):
        self.client = client
        self.request_timeout = request_timeout

    def _timeout(self) -> httpx.Timeout:
        # Per-request limits; the connect timeout stays fixed by the client builder
        return httpx.Timeout(self.request_timeout, connect=CONNECT_TIMEOUT)

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "CardSender":
        client = build_http_client(
            proxy_selector_from_settings(config),
            config.bypass_ssl_validation,
        )
        return cls(client, request_timeout=config.request_timeout)

    def send(self, webhook_url: str, card: Card) -> SendResult:
        try:
            response = self.client.post(
                webhook_url,
                json=build_envelope(card),
                timeout=self._timeout(),
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.error(f"Failed to send card to {_target(webhook_url)}: {e}", exc_info=True)
            return SendResult(ok=False, message=str(e))

        result = parse_response(response)
        _log_result(webhook_url, result)
        return result

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "CardSender":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncCardSender:
    """Send cards through an httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient, request_timeout: float = 15):
        self.client = client
        self.request_timeout = request_timeout

    def _timeout(self) -> httpx.Timeout:
        # Per-request limits; the connect timeout stays fixed by the client builder
        return httpx.Timeout(self.request_timeout, connect=CONNECT_TIMEOUT)

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "AsyncCardSender":
        client = build_async_http_client(
            proxy_selector_from_settings(config),
            config.bypass_ssl_validation,
        )
        return cls(client, request_timeout=config.request_timeout)

    async def send(self, webhook_url: str, card: Card) -> SendResult:
        try:
            response = await self.client.post(
                webhook_url,
                json=build_envelope(card),
                timeout=self._timeout(),
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.error(f"Failed to send card to {_target(webhook_url)}: {e}", exc_info=True)
            return SendResult(ok=False, message=str(e))

        result = parse_response(response)
        _log_result(webhook_url, result)
        return result

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "AsyncCardSender":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
