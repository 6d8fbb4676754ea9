from __future__ import annotations

import httpx
import pytest

from steemconnect import ApiError, Config, HttpClient, Token


def test_request_sets_headers_and_parses_json() -> None:
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    http_client = HttpClient(Config(client_id="app"), Token(access_token="tok"), transport=httpx.MockTransport(_handler))
    assert http_client.request("POST", "/api/me") == {"ok": True}
    assert seen[0].headers["authorization"] == "tok"
    assert seen[0].headers["user-agent"].startswith("steemconnect-python/")


def test_error_message_from_body() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "server_error", "error_description": "node unavailable"})

    http_client = HttpClient(Config(client_id="app"), transport=httpx.MockTransport(_handler))
    with pytest.raises(ApiError) as excinfo:
        http_client.request("POST", "/api/broadcast", json_body={})
    assert excinfo.value.status_code == 500
    assert str(excinfo.value) == "node unavailable"


def test_error_with_text_body() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    http_client = HttpClient(Config(client_id="app"), transport=httpx.MockTransport(_handler))
    with pytest.raises(ApiError) as excinfo:
        http_client.request("GET", "/api/me")
    assert str(excinfo.value) == "GET /api/me failed with 502"
    assert excinfo.value.details == "Bad Gateway"


def test_set_config_switches_base_url_in_place() -> None:
    hosts: list[str] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        hosts.append(request.url.host)
        return httpx.Response(200, json={})

    http_client = HttpClient(Config(client_id="app", base_url="https://a.example"), transport=httpx.MockTransport(_handler))
    http_client.request("GET", "/x")
    assert http_client.set_config(Config(client_id="app", base_url="https://b.example")) is http_client
    http_client.set_access_token(None)
    http_client.request("GET", "/x")
    assert hosts == ["a.example", "b.example"]
    http_client.close()
