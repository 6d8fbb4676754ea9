from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

import httpx

from .auth import AuthManager
from .broadcaster import Broadcaster
from .config_types import ME_PATH, Config
from .provider import Provider
from .response import Response
from .token import Token
from .transport import HttpClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RebuildSlot(Generic[T]):
    """Collaborator slot that builds a fresh instance on every refresh."""

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self.value: T | None = None

    def refresh(self) -> T:
        self.value = self._factory()
        return self.value


class ReuseSlot(Generic[T]):
    """Collaborator slot that builds an instance only when none is held."""

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self.value: T | None = None

    def refresh(self) -> T:
        if self.value is None:
            self.value = self._factory()
        return self.value


class Client:
    """SteemConnect V2 client.

    Single source of truth for the current config and token. The provider,
    http client and broadcaster are brought in line with both before every
    ``auth()``/``broadcast()``/``me()`` call, so config and token may be
    swapped at any time after construction:

    - the provider is rebuilt from scratch (it is immutable once built);
    - the http client is kept and has config and token pushed into it;
    - the broadcaster is created once if missing (an injected one is kept)
      and then has http client, config and token pushed into it.

    An optional httpx ``transport`` is handed to every provider and http
    client the facade builds, so token exchange and broadcast share one seam.

    Not safe for concurrent use from several threads.
    """

    def __init__(self, config: Config, *, transport: httpx.BaseTransport | None = None):
        self._config = config
        self._token: Token | None = None
        self._transport = transport

        self._provider: RebuildSlot[Provider] = RebuildSlot(self._create_provider)
        self._http_client: ReuseSlot[HttpClient] = ReuseSlot(self._create_http_client)
        self._broadcaster: ReuseSlot[Broadcaster] = ReuseSlot(self._create_broadcaster)

        self._provider.refresh()
        self._http_client.refresh()

    # --- state ---
    def set_config(self, config: Config) -> Client:
        self._config = config
        return self

    def get_config(self) -> Config:
        return self._config

    def set_token(self, token: Token | None) -> Client:
        self._token = token
        return self

    def get_token(self) -> Token | None:
        return self._token

    # --- collaborators ---
    def set_oauth_provider(self, provider: Provider) -> Client:
        self._provider.value = provider
        return self

    def get_oauth_provider(self) -> Provider | None:
        return self._provider.value

    def set_http_client(self, http_client: HttpClient) -> Client:
        self._http_client.value = http_client
        return self

    def get_http_client(self) -> HttpClient:
        return self._http_client.refresh()

    def set_broadcaster(self, broadcaster: Broadcaster) -> Client:
        self._broadcaster.value = broadcaster
        return self

    def get_broadcaster(self) -> Broadcaster | None:
        return self._broadcaster.value

    # --- refresh ---
    def refresh_provider(self) -> Client:
        self._provider.refresh()
        logger.debug("oauth provider rebuilt for client_id=%s", self._config.client_id)
        return self

    def refresh_http_client(self) -> Client:
        http_client = self._http_client.refresh()
        http_client.set_config(self._config)
        http_client.set_access_token(self._token)
        return self

    def refresh_broadcaster(self) -> Client:
        broadcaster = self._broadcaster.refresh()
        broadcaster.set_http_client(self._http_client.refresh())
        broadcaster.set_config(self._config)
        broadcaster.set_token(self._token)
        return self

    # --- API ---
    def auth(self) -> AuthManager:
        self.refresh_provider()
        return AuthManager(self._config, self._provider.value, self._token)

    def broadcast(self, *operations: Any) -> Response:
        self.refresh_provider()
        self.refresh_http_client()
        self.refresh_broadcaster()

        # no try/except: transport and API errors reach the caller as raised
        return self._broadcaster.value.broadcast(list(operations))

    def me(self) -> Response:
        self.refresh_provider()
        self.refresh_http_client()
        data = self._http_client.value.request("POST", ME_PATH)
        return Response.from_payload(data)

    def close(self) -> None:
        if self._http_client.value is not None:
            self._http_client.value.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # --- factories, override to customise ---
    def _create_provider(self) -> Provider:
        return Provider(self._config, transport=self._transport)

    def _create_http_client(self) -> HttpClient:
        return HttpClient(self._config, self._token, transport=self._transport)

    def _create_broadcaster(self) -> Broadcaster:
        return Broadcaster(self._config, self._token, self._http_client.refresh())
