from __future__ import annotations

import logging
from typing import Any, Sequence

from .config_types import BROADCAST_PATH, Config
from .operations import Named
from .response import Response
from .token import Token
from .transport import HttpClient

logger = logging.getLogger(__name__)


class Broadcaster:
    def __init__(self, config: Config, token: Token | None, http_client: HttpClient):
        self._config = config
        self._token = token
        self._http_client = http_client

    def set_http_client(self, http_client: HttpClient) -> Broadcaster:
        self._http_client = http_client
        return self

    def get_http_client(self) -> HttpClient:
        return self._http_client

    def set_config(self, config: Config) -> Broadcaster:
        self._config = config
        return self

    def get_config(self) -> Config:
        return self._config

    def set_token(self, token: Token | None) -> Broadcaster:
        self._token = token
        return self

    def get_token(self) -> Token | None:
        return self._token

    @staticmethod
    def serialize(operations: Sequence[Any]) -> list[list[Any]]:
        """Turn operations into ``[name, params]`` pairs, keeping their order.

        Accepts named operation objects exposing ``to_wire()`` as well as raw
        ``(name, params)`` pairs.
        """
        wire: list[list[Any]] = []
        for op in operations:
            if isinstance(op, Named) and hasattr(op, "to_wire"):
                wire.append(op.to_wire())
            elif (
                    isinstance(op, (list, tuple))
                    and len(op) == 2
                    and isinstance(op[0], str)
                    and isinstance(op[1], dict)
            ):
                wire.append([op[0], dict(op[1])])
            else:
                raise TypeError(f"cannot broadcast {type(op).__name__!s}: expected a named operation or (name, params)")
        return wire

    def broadcast(self, operations: Sequence[Any]) -> Response:
        """POST ``operations`` to the broadcast endpoint.

        Sets this broadcaster's token on the http client it was handed before
        sending, so that client is modified in place. Under :class:`Client`
        both already hold the client's current token, so nothing changes.
        Transport and API errors are raised as-is.
        """
        if not operations:
            raise ValueError("at least one operation is required")
        wire = self.serialize(operations)
        logger.debug("broadcasting %d operation(s): %s", len(wire), ", ".join(name for name, _ in wire))
        self._http_client.set_access_token(self._token)
        data = self._http_client.request("POST", BROADCAST_PATH, json_body={"operations": wire})
        return Response.from_payload(data)
