import asyncio
import json

import httpx
import pytest
from pydantic import ValidationError

from app.models.proxy import ProxyRequest
from app.outbound.proxy import OutboundRequestProxy


def _proxy(handler, default_timeout_ms: int = 30000) -> OutboundRequestProxy:
    return OutboundRequestProxy(default_timeout_ms, transport=httpx.MockTransport(handler))


def test_any_upstream_status_is_a_completed_call() -> None:
    for status in (200, 404, 500):
        proxy = _proxy(lambda request, status=status: httpx.Response(status, json={"status": status}))
        result = asyncio.run(proxy.execute(ProxyRequest(url="https://api.example.com/data")))

        assert result.success
        assert result.status == status
        assert result.data == {"status": status}
        assert result.error is None


def test_connection_error_is_normalized() -> None:
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = asyncio.run(_proxy(_refuse).execute(ProxyRequest(url="https://down.example.com")))

    assert not result.success
    assert result.status is None
    assert result.error == "connection refused"


def test_timeout_is_normalized_with_effective_timeout() -> None:
    def _slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    result = asyncio.run(_proxy(_slow).execute(ProxyRequest(url="https://slow.example.com", timeout=1500)))

    assert not result.success
    assert result.error == "timeout of 1500ms exceeded"


def test_unexpected_exception_never_escapes() -> None:
    def _explode(request: httpx.Request) -> httpx.Response:
        raise RuntimeError("boom")

    result = asyncio.run(_proxy(_explode).execute(ProxyRequest(url="https://api.example.com")))

    assert not result.success
    assert result.error == "boom"


def test_missing_url_fails_without_network_call() -> None:
    calls: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    result = asyncio.run(_proxy(_record).execute(ProxyRequest(method="POST")))

    assert not result.success
    assert result.error == "url is required"
    assert calls == []


def test_timeout_resolution_order() -> None:
    seen: list[float] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request.extensions["timeout"]["read"])
        return httpx.Response(204)

    proxy = _proxy(_record, default_timeout_ms=30000)
    asyncio.run(proxy.execute(ProxyRequest(url="https://api.example.com")))
    asyncio.run(proxy.execute(ProxyRequest(url="https://api.example.com"), timeout_ms=10000))
    asyncio.run(proxy.execute(ProxyRequest(url="https://api.example.com", timeout=2500), timeout_ms=10000))

    assert seen == [30.0, 10.0, 2.5]


def test_body_forwarded_as_json_for_post_and_dropped_for_get() -> None:
    captured: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(201, json={"ok": True}, headers={"x-request-id": "req_1"})

    proxy = _proxy(_record)
    post_result = asyncio.run(
        proxy.execute(
            ProxyRequest(
                url="https://api.example.com/users",
                method="post",
                headers={"X-Trace": 7},
                data={"name": "John"},
            )
        )
    )
    asyncio.run(proxy.execute(ProxyRequest(url="https://api.example.com/users", body={"ignored": True})))

    post_request, get_request = captured
    assert post_request.method == "POST"
    assert json.loads(post_request.content) == {"name": "John"}
    assert post_request.headers["x-trace"] == "7"
    assert get_request.method == "GET"
    assert get_request.content == b""
    assert post_result.status == 201
    assert post_result.headers["x-request-id"] == "req_1"


def test_non_json_body_is_returned_as_text() -> None:
    proxy = _proxy(lambda request: httpx.Response(200, text="plain text"))

    result = asyncio.run(proxy.execute(ProxyRequest(url="https://api.example.com/robots.txt")))

    assert result.success
    assert result.data == "plain text"


def test_null_header_values_are_not_sent() -> None:
    seen: list[httpx.Request] = []

    def _capture(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    request = ProxyRequest(url="https://api.example.com", headers={"Authorization": None, "X-Team": "ops"})
    result = asyncio.run(_proxy(_capture).execute(request))

    assert result.success
    assert "authorization" not in seen[0].headers
    assert seen[0].headers["x-team"] == "ops"


def test_non_positive_timeout_is_rejected() -> None:
    for timeout in (0, -5):
        with pytest.raises(ValidationError):
            ProxyRequest(url="https://api.example.com", timeout=timeout)
