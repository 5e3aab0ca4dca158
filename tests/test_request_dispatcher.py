import asyncio
import json

import httpx
import pytest

from adapters.request_dispatcher import RequestDispatcher
from core.domain.errors import DecodeError, HttpError, NetworkError
from core.domain.operations import Operation

from conftest import unreachable_transport


def _dispatcher(settings, handler):
    return RequestDispatcher(settings, transport=httpx.MockTransport(handler))


def test_send_sets_json_and_bearer_headers(settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json={"status": "success", "message": "OTP sent"})

    result = asyncio.run(
        _dispatcher(settings, handler).send(
            "/api/v1/authenticate/email/send-otp", "POST", {"email": "a@b.com"}, "tok-1"
        )
    )

    request = seen["request"]
    assert result == {"status": "success", "message": "OTP sent"}
    assert str(request.url) == "https://wallet.test/api/v1/authenticate/email/send-otp"
    assert request.headers["content-type"] == "application/json"
    assert request.headers["accept"] == "application/json"
    assert request.headers["authorization"] == "Bearer tok-1"
    assert json.loads(request.content) == {"email": "a@b.com"}


def test_send_without_token_omits_authorization(settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json={"status": "success"})

    asyncio.run(_dispatcher(settings, handler).send("/api/v1/wallet", "GET"))

    assert "authorization" not in seen["request"].headers
    assert seen["request"].content == b""


def test_http_error_uses_message_field(settings):
    def handler(request):
        return httpx.Response(401, json={"status": "error", "message": "Invalid OTP"})

    with pytest.raises(HttpError) as info:
        asyncio.run(_dispatcher(settings, handler).send("/x", "POST", {}))

    assert info.value.status == 401
    assert str(info.value) == "Invalid OTP"


def test_http_error_falls_back_to_status_text(settings):
    def handler(request):
        return httpx.Response(503, text="<html>down</html>")

    with pytest.raises(HttpError) as info:
        asyncio.run(_dispatcher(settings, handler).send("/x", "GET"))

    assert info.value.status == 503
    assert info.value.message == "HTTP 503: Service Unavailable"


def test_non_json_success_is_decode_error(settings):
    def handler(request):
        return httpx.Response(200, text="not json")

    with pytest.raises(DecodeError):
        asyncio.run(_dispatcher(settings, handler).send("/x", "GET"))


def test_json_array_success_is_decode_error(settings):
    def handler(request):
        return httpx.Response(200, json=[1, 2])

    with pytest.raises(DecodeError):
        asyncio.run(_dispatcher(settings, handler).send("/x", "GET"))


def test_transport_failure_is_network_error(settings):
    dispatcher = RequestDispatcher(settings, transport=unreachable_transport())

    with pytest.raises(NetworkError):
        asyncio.run(dispatcher.send("/x", "GET"))


def test_perform_maps_operation_to_endpoint(settings):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"status": "success", "data": {"wallets": []}})

    asyncio.run(_dispatcher(settings, handler).perform(Operation.LIST_WALLETS, {"ignored": 1}, "tok"))

    assert seen[0].method == "GET"
    assert seen[0].url.path == "/api/v1/wallet"
    assert seen[0].content == b""


def test_redirect_is_http_error_with_its_status(settings):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(302, headers={"Location": str(request.url)})

    with pytest.raises(HttpError) as info:
        asyncio.run(_dispatcher(settings, handler).send("/api/v1/wallet", "GET", auth_token="tok"))

    assert info.value.status == 302
    assert info.value.message == "HTTP 302: Found"
    assert len(seen) == 1


def test_bad_content_encoding_is_decode_error(settings):
    def handler(request):
        return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all")

    with pytest.raises(DecodeError):
        asyncio.run(_dispatcher(settings, handler).send("/api/v1/wallet", "GET"))
