"""
Shopify GraphQL request pipeline.

Every outbound call to the Admin API goes through ``GraphQLPipeline.send``:
rate-limit, POST, classify. The rate-limit state lives on the pipeline
instance so separate pipelines (e.g. in tests) keep independent timers.
"""

import asyncio
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from .errors import (
    ShopifyConfigError,
    ShopifyProtocolError,
    ShopifyTransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2024-04"
DEFAULT_RATE_LIMIT_SECONDS = 0.5
DEFAULT_TIMEOUT_SECONDS = 30.0

_OPERATION_RE = re.compile(r"^\s*(query|mutation)\s+(\w+)", re.MULTILINE)


@dataclass(frozen=True)
class ShopifyCredentials:
    """Access token and ``*.myshopify.com`` domain for one shop."""
    access_token: str
    shop_domain: str

    def __repr__(self) -> str:
        return f"ShopifyCredentials(shop_domain={self.shop_domain!r}, access_token='***')"


class RateLimiter:
    """
    Minimum-interval limiter keyed on request *start* times.

    The timestamp read-modify-write happens under an ``asyncio.Lock`` so
    interleaved callers queue up and each one is spaced at least
    ``min_interval`` seconds after the previous start.
    """

    def __init__(
        self,
        min_interval: float = DEFAULT_RATE_LIMIT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request_time: Optional[float] = None
        self._lock = asyncio.Lock()

    @property
    def last_request_time(self) -> Optional[float]:
        return self._last_request_time

    async def wait(self) -> float:
        """Block until the next request may start. Returns the seconds waited."""
        async with self._lock:
            waited = 0.0
            if self._last_request_time is not None:
                elapsed = self._clock() - self._last_request_time
                if elapsed < self.min_interval:
                    waited = self.min_interval - elapsed
                    await self._sleep(waited)
            self._last_request_time = self._clock()
            return waited


class GraphQLPipeline:
    """
    Rate-limited transport for the Shopify GraphQL Admin API.

    Usage:
        async with GraphQLPipeline() as pipeline:
            data = await pipeline.send(credentials, "query { shop { name } }")
    """

    def __init__(
        self,
        api_version: str = DEFAULT_API_VERSION,
        rate_limiter: Optional[RateLimiter] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        request_logger=None,
    ):
        self.api_version = api_version
        self.rate_limiter = rate_limiter or RateLimiter()
        self.request_logger = request_logger
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    def endpoint(self, shop_domain: str) -> str:
        return f"https://{shop_domain}/admin/api/{self.api_version}/graphql.json"

    async def send(
        self,
        credentials: ShopifyCredentials,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Send one GraphQL document and return its ``data`` mapping.

        Raises:
            ShopifyConfigError: missing credentials or empty query
            ShopifyTransportError: non-2xx status or no response at all
            ShopifyProtocolError: top-level GraphQL ``errors`` or a body without ``data``
        """
        if not credentials or not credentials.access_token or not credentials.shop_domain:
            raise ShopifyConfigError("Shopify access token and shop domain are required")
        if not query or not query.strip():
            raise ShopifyConfigError("GraphQL query must not be empty")

        operation = _operation_name(query)
        waited = await self.rate_limiter.wait()
        started = time.perf_counter()

        payload: Dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables

        logger.debug(f"POST {operation} to {credentials.shop_domain} (waited {waited * 1000:.0f}ms)")

        status_code = None
        error_type = None
        try:
            try:
                response = await self._client.post(
                    self.endpoint(credentials.shop_domain),
                    headers={
                        "Content-Type": "application/json",
                        "X-Shopify-Access-Token": credentials.access_token,
                    },
                    json=payload,
                )
            except httpx.TransportError as e:
                raise ShopifyTransportError(None, f"{type(e).__name__}: {e}") from e

            status_code = response.status_code
            return self._classify(response)
        except (ShopifyTransportError, ShopifyProtocolError) as e:
            error_type = e.error_type
            logger.warning(f"{operation} failed: {e.message}")
            raise
        finally:
            if self.request_logger is not None:
                # file append runs off the event loop
                await asyncio.to_thread(
                    self.request_logger.log_graphql_call,
                    operation=operation,
                    shop=credentials.shop_domain,
                    status_code=status_code,
                    latency_ms=(time.perf_counter() - started) * 1000,
                    waited_ms=waited * 1000,
                    error_type=error_type,
                )

    def _classify(self, response: httpx.Response) -> Dict[str, Any]:
        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise ShopifyTransportError(response.status_code, body)

        try:
            result = response.json()
        except ValueError:
            raise ShopifyProtocolError(
                response.status_code,
                [{"message": f"Response is not valid JSON: {response.text[:200]}"}],
            )

        if not isinstance(result, dict):
            raise ShopifyProtocolError(
                response.status_code,
                [{"message": "Response body is not a JSON object"}],
            )

        # A non-empty errors list wins even when data is also present
        errors = result.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [errors if isinstance(errors, dict) else {"message": str(errors)}]
            raise ShopifyProtocolError(response.status_code, errors)

        data = result.get("data")
        if not isinstance(data, dict):
            raise ShopifyProtocolError(response.status_code, [{"message": "Response has no data"}])
        return data

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GraphQLPipeline":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _operation_name(query: str) -> str:
    match = _OPERATION_RE.search(query)
    if match:
        return match.group(2)
    return "anonymous"
