from __future__ import annotations


class SteemConnectError(Exception):
    """Base client error."""


class ClientConfigError(SteemConnectError):
    """Configuration is missing or structurally invalid."""


class TokenError(SteemConnectError):
    """Token operation cannot be performed with the current token."""


class NetworkError(SteemConnectError):
    """Transport/network layer error."""


class ApiError(SteemConnectError):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class AuthError(ApiError):
    """Auth-related API error."""


class ResponseError(ApiError):
    """Response body could not be understood."""
