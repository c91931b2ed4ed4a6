"""
Tests for the GraphQL request pipeline.

Covers:
1. RateLimiter spacing (sequential and concurrent callers)
2. Request envelope: URL, headers, body
3. Error classification: transport, protocol, configuration
"""

import asyncio
import threading
import time

import httpx
import pytest

from shopify_mcp.shopify import (
    GraphQLPipeline,
    RateLimiter,
    ShopifyConfigError,
    ShopifyCredentials,
    ShopifyProtocolError,
    ShopifyTransportError,
)
from shopify_mcp.logs import LogCategory, RequestLogger

from conftest import ACCESS_TOKEN, SHOP_DOMAIN, RecordingTransport, graphql_data

SHOP_QUERY = "query getShop { shop { name } }"


class FakeClock:
    """Deterministic clock whose sleep advances time instead of blocking."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


def _pipeline(transport: RecordingTransport, **kwargs) -> GraphQLPipeline:
    kwargs.setdefault("rate_limiter", RateLimiter(0.0))
    return GraphQLPipeline(transport=httpx.MockTransport(transport), **kwargs)


# ========== Rate limiting ==========

class TestRateLimiter:

    @pytest.mark.asyncio
    async def test_first_call_does_not_wait(self):
        clock = FakeClock()
        limiter = RateLimiter(0.5, clock=clock, sleep=clock.sleep)

        waited = await limiter.wait()

        assert waited == 0.0
        assert clock.sleeps == []
        assert limiter.last_request_time == 0.0

    @pytest.mark.asyncio
    async def test_back_to_back_calls_are_spaced(self):
        clock = FakeClock()
        limiter = RateLimiter(0.5, clock=clock, sleep=clock.sleep)

        await limiter.wait()
        clock.now += 0.2
        waited = await limiter.wait()

        assert waited == pytest.approx(0.3)
        assert limiter.last_request_time == pytest.approx(0.5)

    @pytest.mark.asyncio
    async def test_no_wait_after_interval_elapsed(self):
        clock = FakeClock()
        limiter = RateLimiter(0.5, clock=clock, sleep=clock.sleep)

        await limiter.wait()
        clock.now += 2.0
        assert await limiter.wait() == 0.0

    @pytest.mark.asyncio
    async def test_concurrent_callers_are_serialized(self):
        clock = FakeClock()
        limiter = RateLimiter(0.5, clock=clock, sleep=clock.sleep)
        starts = []

        async def call():
            await limiter.wait()
            starts.append(limiter.last_request_time)

        await asyncio.gather(*(call() for _ in range(4)))

        assert starts == pytest.approx([0.0, 0.5, 1.0, 1.5])
        gaps = [b - a for a, b in zip(starts, starts[1:])]
        assert all(gap >= 0.5 - 1e-9 for gap in gaps)

    @pytest.mark.asyncio
    async def test_separate_limiters_are_independent(self):
        clock = FakeClock()
        first = RateLimiter(0.5, clock=clock, sleep=clock.sleep)
        second = RateLimiter(0.5, clock=clock, sleep=clock.sleep)

        await first.wait()
        assert await second.wait() == 0.0

    @pytest.mark.asyncio
    async def test_pipeline_requests_are_spaced_in_real_time(self, credentials):
        interval = 0.05
        seen = []

        def handler(request):
            seen.append(time.monotonic())
            return httpx.Response(200, json={"data": {"shop": {"name": "Test"}}})

        pipeline = _pipeline(RecordingTransport(handler=handler), rate_limiter=RateLimiter(interval))
        await asyncio.gather(*(pipeline.send(credentials, SHOP_QUERY) for _ in range(3)))
        await pipeline.aclose()

        gaps = [b - a for a, b in zip(seen, seen[1:])]
        # scheduling jitter between the limiter and the transport
        assert all(gap >= interval - 0.01 for gap in gaps)


# ========== Request envelope ==========

class TestRequestEnvelope:

    @pytest.mark.asyncio
    async def test_posts_to_admin_endpoint(self, credentials):
        transport = RecordingTransport([graphql_data({"shop": {"name": "Test"}})])
        pipeline = _pipeline(transport, api_version="2024-04")

        data = await pipeline.send(credentials, SHOP_QUERY, {"first": 5})

        assert data == {"shop": {"name": "Test"}}
        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"https://{SHOP_DOMAIN}/admin/api/2024-04/graphql.json"
        assert request.headers["X-Shopify-Access-Token"] == ACCESS_TOKEN
        assert request.headers["Content-Type"] == "application/json"
        assert transport.bodies[0] == {"query": SHOP_QUERY, "variables": {"first": 5}}

    @pytest.mark.asyncio
    async def test_variables_omitted_when_none(self, credentials):
        transport = RecordingTransport([graphql_data({"shop": {}})])
        await _pipeline(transport).send(credentials, SHOP_QUERY)

        assert "variables" not in transport.bodies[0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"data": None}, {"data": []}])
    async def test_missing_data_is_protocol_error(self, credentials, body):
        transport = RecordingTransport([httpx.Response(200, json=body)])

        with pytest.raises(ShopifyProtocolError) as exc_info:
            await _pipeline(transport).send(credentials, SHOP_QUERY)

        assert exc_info.value.errors == [{"message": "Response has no data"}]

    def test_credentials_repr_masks_token(self, credentials):
        assert ACCESS_TOKEN not in repr(credentials)


# ========== Error classification ==========

class TestErrorClassification:

    @pytest.mark.asyncio
    async def test_non_2xx_is_transport_error(self, credentials):
        transport = RecordingTransport([httpx.Response(404, json={"errors": "Not Found"})])

        with pytest.raises(ShopifyTransportError) as exc_info:
            await _pipeline(transport).send(credentials, SHOP_QUERY)

        err = exc_info.value
        assert err.status_code == 404
        assert err.error_type == "transport"
        assert err.body == {"errors": "Not Found"}

    @pytest.mark.asyncio
    async def test_unauthorized_is_transport_error(self, credentials):
        transport = RecordingTransport([httpx.Response(401, text="Invalid API key")])

        with pytest.raises(ShopifyTransportError) as exc_info:
            await _pipeline(transport).send(credentials, SHOP_QUERY)

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == "Invalid API key"

    @pytest.mark.asyncio
    async def test_graphql_errors_are_protocol_error(self, credentials):
        errors = [{"message": "Field 'nope' doesn't exist on type 'Shop'"}]
        transport = RecordingTransport([httpx.Response(200, json={"errors": errors})])

        with pytest.raises(ShopifyProtocolError) as exc_info:
            await _pipeline(transport).send(credentials, SHOP_QUERY)

        err = exc_info.value
        assert err.status_code == 200
        assert err.errors == errors
        assert "doesn't exist" in err.message

    @pytest.mark.asyncio
    async def test_errors_win_over_partial_data(self, credentials):
        body = {"data": {"shop": {"name": "Test"}}, "errors": [{"message": "Throttled"}]}
        transport = RecordingTransport([httpx.Response(200, json=body)])

        with pytest.raises(ShopifyProtocolError):
            await _pipeline(transport).send(credentials, SHOP_QUERY)

    @pytest.mark.asyncio
    async def test_empty_errors_list_is_success(self, credentials):
        body = {"data": {"shop": {"name": "Test"}}, "errors": []}
        transport = RecordingTransport([httpx.Response(200, json=body)])

        assert await _pipeline(transport).send(credentials, SHOP_QUERY) == {"shop": {"name": "Test"}}

    @pytest.mark.asyncio
    async def test_invalid_json_is_protocol_error(self, credentials):
        transport = RecordingTransport([httpx.Response(200, text="<html>oops</html>")])

        with pytest.raises(ShopifyProtocolError):
            await _pipeline(transport).send(credentials, SHOP_QUERY)

    @pytest.mark.asyncio
    async def test_network_failure_is_transport_error(self, credentials):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ShopifyTransportError) as exc_info:
            await _pipeline(RecordingTransport(handler=handler)).send(credentials, SHOP_QUERY)

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_missing_token_fails_before_network(self):
        transport = RecordingTransport([])

        with pytest.raises(ShopifyConfigError):
            await _pipeline(transport).send(ShopifyCredentials("", SHOP_DOMAIN), SHOP_QUERY)

        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_empty_query_fails_before_network(self, credentials):
        transport = RecordingTransport([])

        with pytest.raises(ShopifyConfigError):
            await _pipeline(transport).send(credentials, "   ")

        assert transport.requests == []


# ========== Call log ==========

class TestCallLog:

    @pytest.mark.asyncio
    async def test_calls_are_logged(self, credentials, tmp_path):
        request_logger = RequestLogger(str(tmp_path))
        transport = RecordingTransport([
            graphql_data({"shop": {"name": "Test"}}),
            httpx.Response(500, text="boom"),
        ])
        pipeline = _pipeline(transport, request_logger=request_logger)

        await pipeline.send(credentials, SHOP_QUERY)
        with pytest.raises(ShopifyTransportError):
            await pipeline.send(credentials, SHOP_QUERY)

        logs = request_logger.read_logs(LogCategory.GRAPHQL_CALL)
        assert [entry["operation"] for entry in logs] == ["getShop", "getShop"]
        assert [entry["status_code"] for entry in logs] == [200, 500]
        assert [entry["error_type"] for entry in logs] == [None, "transport"]
        assert all(entry["shop"] == SHOP_DOMAIN for entry in logs)

    @pytest.mark.asyncio
    async def test_log_writes_leave_the_event_loop_thread(self, credentials, tmp_path):
        request_logger = RequestLogger(str(tmp_path))
        writer_threads = []
        write = request_logger.log_graphql_call

        def recording_write(**kwargs):
            writer_threads.append(threading.get_ident())
            return write(**kwargs)

        request_logger.log_graphql_call = recording_write
        transport = RecordingTransport([graphql_data({"shop": {"name": "Test"}})])

        await _pipeline(transport, request_logger=request_logger).send(credentials, SHOP_QUERY)

        assert len(writer_threads) == 1
        assert writer_threads[0] != threading.get_ident()
        assert len(request_logger.read_logs(LogCategory.GRAPHQL_CALL)) == 1
