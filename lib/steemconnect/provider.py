from __future__ import annotations

import logging
from typing import Any, Iterable
from urllib.parse import urlencode

import httpx

from .config_types import AUTHORIZE_PATH, REVOKE_PATH, TOKEN_PATH, Config
from .errors import NetworkError
from .token import Token
from .transport import USER_AGENT, parse_response

logger = logging.getLogger(__name__)


class Provider:
    """OAuth2 provider for SteemConnect.

    Builds authorization URLs and talks to the token endpoints. The config is
    validated on construction and the instance never changes afterwards, so a
    new Provider is built whenever the config may have changed.

    Token calls go through module-level ``httpx.post`` unless a ``transport``
    is given, in which case a short-lived ``httpx.Client`` on that transport
    is used instead.
    """

    def __init__(self, config: Config, *, transport: httpx.BaseTransport | None = None):
        config.validate()
        self._config = config
        self._transport = transport

    @property
    def config(self) -> Config:
        return self._config

    def get_authorization_url(self, *, state: str | None = None, scopes: Iterable[str] | None = None) -> str:
        cfg = self._config
        params: dict[str, Any] = {
            "client_id": cfg.client_id,
            "redirect_uri": cfg.require_return_url(),
            "response_type": cfg.response_type,
            "scope": ",".join(scopes) if scopes is not None else cfg.scope_string,
        }
        if state:
            params["state"] = state
        return cfg.url(AUTHORIZE_PATH) + "?" + urlencode(params)

    def get_access_token(self, code: str) -> Token:
        body = {"code": code, "client_secret": self._config.require_client_secret()}
        return Token.from_response(self._post(TOKEN_PATH, body))

    def refresh_access_token(self, refresh_token: str) -> Token:
        body = {"refresh_token": refresh_token, "client_secret": self._config.require_client_secret()}
        return Token.from_response(self._post(TOKEN_PATH, body))

    def revoke_token(self, access_token: str) -> dict[str, Any]:
        data = self._post(REVOKE_PATH, {}, headers={"Authorization": access_token})
        return data if isinstance(data, dict) else {"raw": data}

    def _post(self, path: str, body: dict[str, Any], *, headers: dict[str, str] | None = None) -> Any:
        logger.debug("POST %s", path)
        request_headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        if headers:
            request_headers.update(headers)
        try:
            if self._transport is None:
                r = httpx.post(
                    self._config.url(path),
                    json=body,
                    headers=request_headers,
                    timeout=self._config.timeout_s,
                )
            else:
                shared = _BorrowedTransport(self._transport)
                with httpx.Client(transport=shared, timeout=self._config.timeout_s) as http:
                    r = http.post(self._config.url(path), json=body, headers=request_headers)
        except httpx.RequestError as e:
            raise NetworkError(str(e)) from e
        return parse_response("POST", path, r)


class _BorrowedTransport(httpx.BaseTransport):
    # closing the short-lived client must not close the caller's transport
    def __init__(self, inner: httpx.BaseTransport):
        self._inner = inner

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        return self._inner.handle_request(request)
