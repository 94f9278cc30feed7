"""Config validation for webhook and proxy URLs."""

from typing import Optional
from urllib.parse import urlparse

LARK_WEBHOOK_HOSTS = {"open.feishu.cn", "open.larksuite.com"}
LARK_WEBHOOK_PATH_PREFIX = "/open-apis/bot/"


def is_lark_webhook(url: str) -> bool:
    """True if the URL points at a Feishu/Lark custom bot hook."""
    parsed = urlparse(url or "")
    return (
        (parsed.hostname or "").lower() in LARK_WEBHOOK_HOSTS
        and parsed.path.startswith(LARK_WEBHOOK_PATH_PREFIX)
    )


def validate_webhook_url(url) -> Optional[str]:
    """
    Validate a webhook URL.
    Returns None if valid, or an error message string if invalid.
    """
    return _validate_url(url, "webhook_url", ("http", "https"))


def validate_proxy_url(url) -> Optional[str]:
    """
    Validate a proxy URL. An empty value means "no explicit proxy" and is valid.
    """
    if url in (None, ""):
        return None
    return _validate_url(url, "proxy_url", ("http", "https"))


# --- Internal validators ---


def _validate_url(value, field_name: str, schemes: tuple[str, ...]) -> Optional[str]:
    if not isinstance(value, str) or not value:
        return f"Missing required field: {field_name}"
    try:
        parsed = urlparse(value)
        if parsed.scheme not in schemes:
            return f"{field_name} must use {' or '.join(schemes)} protocol"
        if not parsed.hostname:
            return f"{field_name} is not a valid URL"
        # Accessing .port raises ValueError on a malformed port
        parsed.port
    except ValueError:
        return f"{field_name} is not a valid URL"
    return None
