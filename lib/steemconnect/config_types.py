from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from .errors import ClientConfigError

DEFAULT_BASE_URL = "https://steemconnect.com"

AUTHORIZE_PATH = "/oauth2/authorize"
TOKEN_PATH = "/api/oauth2/token"
REVOKE_PATH = "/api/oauth2/token/revoke"
BROADCAST_PATH = "/api/broadcast"
ME_PATH = "/api/me"

KNOWN_SCOPES = frozenset(
    {
        "login",
        "offline",
        "vote",
        "comment",
        "delete_comment",
        "comment_options",
        "custom_json",
        "claim_reward_balance",
    }
)
RESPONSE_TYPES = ("code", "token")


@dataclass(frozen=True)
class Config:
    client_id: str
    client_secret: str = ""
    return_url: str = ""
    scopes: tuple[str, ...] = ("login", "vote", "comment")
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = 15.0
    response_type: str = "code"

    def replace(self, **changes) -> Config:
        return dataclasses.replace(self, **changes)

    @property
    def scope_string(self) -> str:
        return ",".join(self.scopes)

    def url(self, path: str) -> str:
        return self.base_url.rstrip("/") + path

    def validate(self) -> None:
        problems: list[str] = []
        if not (self.client_id or "").strip():
            problems.append("client_id is required")
        base = (self.base_url or "").strip().lower()
        if not base:
            problems.append("base_url is required")
        elif not (base.startswith("http://") or base.startswith("https://")):
            problems.append(f"base_url must start with http:// or https:// (got {self.base_url!r})")
        if self.response_type not in RESPONSE_TYPES:
            problems.append(f"response_type must be one of {', '.join(RESPONSE_TYPES)}")
        unknown = [s for s in self.scopes if s not in KNOWN_SCOPES]
        if unknown:
            problems.append(f"unknown scopes: {', '.join(unknown)}")
        if problems:
            raise ClientConfigError("; ".join(problems))

    def require_return_url(self) -> str:
        value = (self.return_url or "").strip()
        if not value:
            raise ClientConfigError("return_url is required for the authorization flow")
        return value

    def require_client_secret(self) -> str:
        value = (self.client_secret or "").strip()
        if not value:
            raise ClientConfigError("client_secret is required to exchange or refresh tokens")
        return value
