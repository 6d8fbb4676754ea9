from .auth import AuthManager
from .broadcaster import Broadcaster
from .client import Client
from .config_types import Config
from .errors import (
    ApiError,
    AuthError,
    ClientConfigError,
    NetworkError,
    ResponseError,
    SteemConnectError,
    TokenError,
)
from .operations import Named, Operation
from .provider import Provider
from .response import Response
from .token import Token
from .transport import HttpClient

__version__ = "0.1.0"

__all__ = [
    "Client",
    "Config",
    "Token",
    "Provider",
    "HttpClient",
    "Broadcaster",
    "AuthManager",
    "Response",
    "Named",
    "Operation",
    "SteemConnectError",
    "ClientConfigError",
    "TokenError",
    "NetworkError",
    "ApiError",
    "AuthError",
    "ResponseError",
]
