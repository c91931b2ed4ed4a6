"""
Runtime configuration.

Read once from the environment (and a local ``.env`` when present) at
process start. There is no hot-reload.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .shopify.errors import ShopifyConfigError
from .shopify.pipeline import (
    DEFAULT_API_VERSION,
    DEFAULT_TIMEOUT_SECONDS,
    ShopifyCredentials,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _normalize_domain(domain: str) -> str:
    domain = domain.strip()
    domain = domain.replace("https://", "").replace("http://", "")
    return domain.rstrip("/")


@dataclass(frozen=True)
class Settings:
    access_token: str = field(repr=False)
    shop_domain: str
    api_version: str = DEFAULT_API_VERSION
    rate_limit_ms: int = 500
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS
    request_log_dir: Optional[str] = None
    log_level: str = "INFO"

    @property
    def credentials(self) -> ShopifyCredentials:
        return ShopifyCredentials(self.access_token, self.shop_domain)

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """
        Build settings from environment variables.

        Raises ShopifyConfigError when the token or shop domain is missing
        or a numeric value cannot be parsed.
        """
        if load_env_file:
            load_dotenv()

        access_token = os.getenv("SHOPIFY_ACCESS_TOKEN", "").strip()
        shop_domain = _normalize_domain(os.getenv("MYSHOPIFY_DOMAIN", ""))

        missing = [
            name for name, value in (
                ("SHOPIFY_ACCESS_TOKEN", access_token),
                ("MYSHOPIFY_DOMAIN", shop_domain),
            ) if not value
        ]
        if missing:
            raise ShopifyConfigError(
                f"Missing required environment variables: {', '.join(missing)}",
                {"missing": missing},
            )

        try:
            rate_limit_ms = int(os.getenv("SHOPIFY_RATE_LIMIT_MS", "500"))
            request_timeout = float(os.getenv("SHOPIFY_REQUEST_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS)))
        except ValueError as e:
            raise ShopifyConfigError(f"Invalid numeric setting: {e}")

        return cls(
            access_token=access_token,
            shop_domain=shop_domain,
            api_version=os.getenv("SHOPIFY_API_VERSION", DEFAULT_API_VERSION),
            rate_limit_ms=rate_limit_ms,
            request_timeout=request_timeout,
            request_log_dir=os.getenv("REQUEST_LOG_DIR") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO", stream=None) -> None:
    """Configure root logging for an entrypoint."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=stream,
    )
