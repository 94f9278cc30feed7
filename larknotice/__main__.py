"""
Send a test card to a Lark/Feishu bot webhook.

Usage:
    python -m larknotice --webhook-url https://open.feishu.cn/open-apis/bot/v2/hook/<token>
    python -m larknotice --insecure   # test server with a self-signed certificate

Missing options fall back to LARK_NOTICE_* environment variables.
"""

import argparse
import logging
import sys
from typing import Optional

from larknotice.config import settings
from larknotice.sdk import Card
from larknotice.sdk.http_client import HttpClientBuildError, build_http_client
from larknotice.sdk.proxy import ProxySelector
from larknotice.sdk.sender import CardSender
from larknotice.validate import is_lark_webhook, validate_proxy_url, validate_webhook_url


def build_test_card(title: str, text: str) -> Card:
    return Card(
        config={"wide_screen_mode": True, "enable_forward": True},
        header={"title": {"tag": "plain_text", "content": title}, "template": "blue"},
        elements=[{"tag": "markdown", "content": text}],
    )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="larknotice", description="Send a test card to a webhook.")
    parser.add_argument("--webhook-url", default=settings.webhook_url)
    parser.add_argument("--title", default="Test notification")
    parser.add_argument("--text", default="If you can read this, the webhook is configured correctly.")
    parser.add_argument("--proxy", default=settings.proxy_url, help="proxy URL (default: environment)")
    parser.add_argument("--no-proxy", default=settings.no_proxy_hosts, help="comma-separated hosts to reach directly")
    parser.add_argument(
        "--insecure",
        action="store_true",
        default=settings.bypass_ssl_validation,
        help="skip SSL certificate validation (test environments only)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    log_level = settings.log_level.upper()
    if not isinstance(logging.getLevelName(log_level), int):
        print(f"ERROR: invalid log level: {settings.log_level}", file=sys.stderr)
        return 2
    logging.basicConfig(level=log_level, format="%(levelname)s %(name)s: %(message)s")

    err = validate_webhook_url(args.webhook_url) or validate_proxy_url(args.proxy)
    if err:
        print(f"ERROR: {err}", file=sys.stderr)
        return 2
    if not is_lark_webhook(args.webhook_url):
        print("WARNING: URL does not look like a Lark/Feishu bot webhook", file=sys.stderr)

    # No --proxy and no LARK_NOTICE_PROXY_URL: defer to HTTP_PROXY / NO_PROXY
    proxy_selector = ProxySelector.from_url(args.proxy, args.no_proxy) if args.proxy else None

    try:
        client = build_http_client(proxy_selector, args.insecure)
    except HttpClientBuildError as e:
        print(f"ERROR: {e}: {e.__cause__}", file=sys.stderr)
        return 1

    with CardSender(client, request_timeout=settings.request_timeout) as sender:
        result = sender.send(args.webhook_url, build_test_card(args.title, args.text))

    if not result.ok:
        print(f"FAILED: status={result.status_code} code={result.code} {result.message}", file=sys.stderr)
        return 1
    print("Card delivered.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
