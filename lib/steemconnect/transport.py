from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .config_types import Config
from .errors import ApiError, AuthError, NetworkError
from .token import Token

logger = logging.getLogger(__name__)

USER_AGENT = "steemconnect-python/0.1.0"


def parse_response(method: str, path: str, r: httpx.Response) -> Any:
    # Try parse body as json for better errors / output
    data: Any = None
    text = None
    try:
        data = r.json()
    except ValueError:
        text = r.text

    if r.status_code >= 400:
        msg = f"{method} {path} failed with {r.status_code}"
        details = None

        if isinstance(data, dict):
            details = json.dumps(data, ensure_ascii=False)
            for key in ("error_description", "error", "message", "detail"):
                if data.get(key):
                    msg = str(data[key])
                    break
        elif text:
            details = text[:1000]

        if r.status_code in (401, 403):
            raise AuthError(r.status_code, msg, details)
        raise ApiError(r.status_code, msg, details)

    return data if data is not None else r.text


class HttpClient:
    """Authenticated HTTP access to the SteemConnect API.

    Config and token are swapped in place with :meth:`set_config` and
    :meth:`set_access_token`; the underlying ``httpx.Client`` is rebuilt only
    when the base URL or timeout changes, and an injected ``transport`` is kept
    across rebuilds.
    """

    def __init__(
            self,
            config: Config,
            token: Token | None = None,
            *,
            transport: httpx.BaseTransport | None = None,
    ):
        self._config = config
        self._token = token
        self._transport = transport
        self._client: httpx.Client | None = None
        self._client_key: tuple[str, float] | None = None

    def set_config(self, config: Config) -> HttpClient:
        self._config = config
        return self

    def get_config(self) -> Config:
        return self._config

    def set_access_token(self, token: Token | None) -> HttpClient:
        self._token = token
        return self

    def get_access_token(self) -> Token | None:
        return self._token

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            self._client_key = None

    def _http(self) -> httpx.Client:
        key = (self._config.base_url.rstrip("/"), float(self._config.timeout_s))
        if self._client is not None and self._client_key == key:
            return self._client
        if self._client is not None:
            logger.debug("base_url or timeout changed, rebuilding http session")
            self._client.close()
        self._client = httpx.Client(
            base_url=key[0],
            timeout=key[1],
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            follow_redirects=True,
            transport=self._transport,
        )
        self._client_key = key
        return self._client

    def auth_headers(self) -> dict[str, str]:
        # SteemConnect expects the raw token, without a "Bearer" prefix.
        if self._token is None:
            return {}
        return {"Authorization": self._token.access_token}

    def request(self, method: str, path: str, *, json_body: Any | None = None) -> Any:
        logger.debug("%s %s", method, path)
        try:
            r = self._http().request(method, path, json=json_body, headers=self.auth_headers())
        except httpx.RequestError as e:
            raise NetworkError(str(e)) from e
        return parse_response(method, path, r)
