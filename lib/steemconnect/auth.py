from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Mapping
from urllib.parse import parse_qs, urlsplit

from .config_types import Config
from .errors import AuthError, TokenError
from .provider import Provider
from .token import Token

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


class AuthManager:
    """Runs the SteemConnect authorization handshake.

    The manager only hands tokens back; storing one on a client is always
    the caller's decision (``client.set_token(token)``).
    """

    def __init__(self, config: Config, provider: Provider, token: Token | None = None):
        config.validate()
        self._config = config
        self._provider = provider
        self._token = token

    def get_config(self) -> Config:
        return self._config

    def get_provider(self) -> Provider:
        return self._provider

    def get_token(self) -> Token | None:
        return self._token

    def has_token(self) -> bool:
        return self._token is not None

    def get_authorization_url(self, *, state: str | None = None, scopes: Iterable[str] | None = None) -> str:
        return self._provider.get_authorization_url(state=state, scopes=scopes)

    def exchange_code(self, code: str) -> Token:
        if not code:
            raise AuthError(400, "authorization code is empty", None)
        token = self._provider.get_access_token(code)
        logger.debug("authorization code exchanged for %s", token.username or "unknown user")
        self._token = token
        return token

    def parse_return_url(self, url_or_query: str | Mapping[str, Any], *, expected_state: str | None = None) -> Token:
        """Handle the redirect back from SteemConnect.

        Accepts the full return URL, its query string, or already parsed
        query params. Implicit-flow redirects carry the token directly,
        code-flow redirects carry a code that is exchanged here.
        """
        params = _query_params(url_or_query)

        if params.get("error"):
            msg = params.get("error_description") or params["error"]
            raise AuthError(400, f"authorization failed: {msg}", None)

        if expected_state is not None and params.get("state") != expected_state:
            raise AuthError(400, "authorization state mismatch", None)

        if params.get("access_token"):
            self._token = Token.from_response(params)
            return self._token

        code = params.get("code")
        if code:
            return self.exchange_code(code)

        raise AuthError(400, "return URL carries neither a code nor an access token", None)

    def refresh(self, token: Token | None = None) -> Token:
        current = token or self._token
        if current is None or not current.refresh_token:
            raise TokenError("no refresh token available; request the 'offline' scope to get one")
        self._token = self._provider.refresh_access_token(current.refresh_token)
        return self._token

    def revoke(self, token: Token | None = None) -> dict[str, Any]:
        current = token or self._token
        if current is None:
            raise TokenError("no token to revoke")
        return self._provider.revoke_token(current.access_token)


def _query_params(url_or_query: str | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(url_or_query, Mapping):
        return dict(url_or_query)
    raw = url_or_query.strip()
    if _SCHEME_RE.match(raw) or _has_url_prefix(raw):
        parts = urlsplit(raw)
        # implicit flow may put params in the fragment
        raw = parts.query or parts.fragment
    parsed = parse_qs(raw.lstrip("?#"), keep_blank_values=False)
    return {k: v[-1] for k, v in parsed.items() if v}


def _has_url_prefix(raw: str) -> bool:
    # "/callback?code=..." or "?code=..."; a "?" inside a param value does not count
    for sep in ("?", "#"):
        head, found, _ = raw.partition(sep)
        if found and "=" not in head and "&" not in head:
            return True
    return False
