from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    webhook_url: str = ""

    # Outbound proxy; empty = use HTTP_PROXY / HTTPS_PROXY / NO_PROXY from the environment
    proxy_url: str = ""
    no_proxy_hosts: str = ""  # comma-separated

    # Accept any server certificate. Test environments only.
    bypass_ssl_validation: bool = False

    # Per-request timeout in seconds (connect timeout is fixed by the client builder)
    request_timeout: float = 15

    log_level: str = "INFO"

    model_config = {"env_prefix": "LARK_NOTICE_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
