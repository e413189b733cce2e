"""Tests for the shared async request helper."""

import asyncio

import httpx
import pytest
import respx
from httpx import Response

from snowhound.errors import RateLimited, UpstreamUnavailable
from snowhound.ingest.http_client import parse_retry_after, request_json

URL = "https://api.example.test/data"


def _get(**kwargs):
    kwargs.setdefault("retry_base_delay", 0.0)
    return asyncio.run(
        request_json("GET", URL, provider="test", timeout=5.0, **kwargs)
    )


class TestRequestJson:
    @respx.mock
    def test_success(self):
        route = respx.get(URL).mock(return_value=Response(200, json={"ok": True}))
        assert _get(params={"a": 1}) == {"ok": True}
        assert route.calls.last.request.url.params["a"] == "1"

    @respx.mock
    def test_retries_gateway_errors(self):
        route = respx.get(URL).mock(
            side_effect=[Response(503), Response(200, json=[1, 2])]
        )
        assert _get(max_retries=1) == [1, 2]
        assert route.call_count == 2

    @respx.mock
    def test_gives_up_after_retries(self):
        route = respx.get(URL).mock(return_value=Response(502))
        with pytest.raises(UpstreamUnavailable) as exc_info:
            _get(max_retries=2)
        assert exc_info.value.status_code == 502
        assert route.call_count == 3

    @respx.mock
    def test_client_error_not_retried(self):
        route = respx.get(URL).mock(return_value=Response(404))
        with pytest.raises(UpstreamUnavailable, match="404"):
            _get(max_retries=2)
        assert route.call_count == 1

    @respx.mock
    def test_rate_limited_header(self):
        respx.get(URL).mock(return_value=Response(429, headers={"Retry-After": "30"}))
        with pytest.raises(RateLimited) as exc_info:
            _get()
        assert exc_info.value.retry_after == 30

    @respx.mock
    def test_rate_limited_body(self):
        respx.get(URL).mock(return_value=Response(429, json={"retryAfter": 12}))
        with pytest.raises(RateLimited) as exc_info:
            _get()
        assert exc_info.value.retry_after == 12

    @respx.mock
    def test_transport_error(self):
        respx.get(URL).mock(side_effect=httpx.ConnectError("boom"))
        with pytest.raises(UpstreamUnavailable, match="boom") as exc_info:
            _get()
        assert exc_info.value.provider == "test"

    @respx.mock
    def test_transport_error_retried(self):
        route = respx.get(URL).mock(
            side_effect=[httpx.ConnectTimeout("slow"), Response(200, json={})]
        )
        assert _get(max_retries=1) == {}
        assert route.call_count == 2

    @respx.mock
    def test_invalid_json(self):
        respx.get(URL).mock(return_value=Response(200, text="<html>"))
        with pytest.raises(UpstreamUnavailable, match="invalid JSON"):
            _get()


class TestParseRetryAfter:
    def test_missing(self):
        assert parse_retry_after(Response(429, text="slow down")) is None

    def test_bad_header_falls_back_to_body(self):
        resp = Response(429, headers={"Retry-After": "soon"}, json={"retryAfter": "5"})
        assert parse_retry_after(resp) == 5
