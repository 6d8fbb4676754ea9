from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .errors import ApiError, ResponseError


@dataclass(frozen=True)
class Response:
    data: dict[str, Any]

    @classmethod
    def from_payload(cls, payload: Any) -> Response:
        if not isinstance(payload, dict):
            raise ResponseError(200, "expected a JSON object in response", str(payload)[:1000])
        if payload.get("error"):
            msg = str(payload.get("error_description") or payload["error"])
            raise ApiError(200, msg, json.dumps(payload, ensure_ascii=False))
        return cls(data=payload)

    @property
    def result(self) -> Any:
        return self.data.get("result", self.data)

    @property
    def transaction_id(self) -> str | None:
        result = self.result
        if isinstance(result, dict) and isinstance(result.get("id"), str):
            return result["id"]
        return None

    @property
    def block_num(self) -> int | None:
        result = self.result
        if isinstance(result, dict) and isinstance(result.get("block_num"), int):
            return result["block_num"]
        return None

    @property
    def is_expired(self) -> bool:
        result = self.result
        return bool(isinstance(result, dict) and result.get("expired"))
