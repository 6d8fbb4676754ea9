from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from .errors import ResponseError


@dataclass(frozen=True)
class Token:
    """Access token issued by SteemConnect, plus whatever metadata came with it."""

    access_token: str = field(repr=False)
    refresh_token: str | None = field(default=None, repr=False)
    expires_in: int | None = None
    expires_at: datetime | None = None
    scope: str | None = None
    username: str | None = None

    @classmethod
    def from_response(cls, payload: Any, *, now: datetime | None = None) -> Token:
        if not isinstance(payload, dict):
            raise ResponseError(200, "token response is not a JSON object", str(payload)[:1000])
        access_token = payload.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise ResponseError(200, "token response has no access_token", None)

        expires_in = _to_int(payload.get("expires_in"))
        expires_at = None
        if expires_in is not None:
            expires_at = (now or datetime.now(timezone.utc)) + timedelta(seconds=expires_in)

        refresh_token = payload.get("refresh_token")
        scope = payload.get("scope")
        username = payload.get("username")
        return cls(
            access_token=access_token,
            refresh_token=refresh_token if isinstance(refresh_token, str) and refresh_token else None,
            expires_in=expires_in,
            expires_at=expires_at,
            scope=scope if isinstance(scope, str) else None,
            username=username if isinstance(username, str) else None,
        )

    def has_expired(self, *, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now(timezone.utc)) >= self.expires_at

    def to_dict(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_in": self.expires_in,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
            "scope": self.scope,
            "username": self.username,
        }


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
