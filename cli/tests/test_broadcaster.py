from __future__ import annotations

import pytest

from steemconnect import ApiError, Broadcaster, Config, ResponseError, Token
from steemconnect import operations as ops


class _FakeHttpClient:
    def __init__(self, payload) -> None:
        self.payload = payload
        self.calls: list[tuple] = []
        self.token = None

    def set_access_token(self, token):
        self.token = token
        return self

    def request(self, method, path, *, json_body=None):
        self.calls.append((method, path, json_body))
        return self.payload


def _broadcaster(payload) -> tuple[Broadcaster, _FakeHttpClient]:
    http_client = _FakeHttpClient(payload)
    return Broadcaster(Config(client_id="app1"), Token(access_token="tok"), http_client), http_client


def test_serialize_accepts_operations_and_pairs_in_order() -> None:
    wire = Broadcaster.serialize([ops.vote("a", "b", "c", 100), ("custom_json", {"id": "x"}), ["vote", {"w": 1}]])
    assert [name for name, _ in wire] == ["vote", "custom_json", "vote"]
    assert wire[1] == ["custom_json", {"id": "x"}]


def test_serialize_rejects_unknown_items() -> None:
    with pytest.raises(TypeError):
        Broadcaster.serialize([{"name": "vote"}])


def test_broadcast_posts_operations() -> None:
    broadcaster, http_client = _broadcaster({"result": {"id": "abc", "block_num": 7, "expired": False}})
    resp = broadcaster.broadcast([ops.vote("a", "b", "c")])
    (call,) = http_client.calls
    assert call[0:2] == ("POST", "/api/broadcast")
    assert call[2] == {"operations": [["vote", {"voter": "a", "author": "b", "permlink": "c", "weight": 10000}]]}
    assert http_client.token.access_token == "tok"
    assert resp.transaction_id == "abc"
    assert resp.block_num == 7
    assert resp.is_expired is False


def test_broadcast_requires_operations() -> None:
    broadcaster, _ = _broadcaster({})
    with pytest.raises(ValueError):
        broadcaster.broadcast([])


def test_broadcast_error_body_raises_api_error() -> None:
    broadcaster, _ = _broadcaster({"error": "server_error", "error_description": "missing required posting authority"})
    with pytest.raises(ApiError) as excinfo:
        broadcaster.broadcast([ops.vote("a", "b", "c")])
    assert "posting authority" in str(excinfo.value)


def test_broadcast_non_object_body_raises_response_error() -> None:
    broadcaster, _ = _broadcaster("<html>gateway</html>")
    with pytest.raises(ResponseError):
        broadcaster.broadcast([ops.vote("a", "b", "c")])
