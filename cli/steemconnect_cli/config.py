from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from steemconnect.config_types import DEFAULT_BASE_URL

from . import console

APP_NAME = "steemconnect"
CONFIG_FILENAME = "config.toml"
ENV_CLIENT_SECRET = "SC2_CLIENT_SECRET"
ENV_ACCESS_TOKEN = "SC2_ACCESS_TOKEN"
DEFAULT_SCOPES = ["login", "vote", "comment"]

_WARNED_BASE_URL_SCHEME = False


@dataclass
class AppConfig:
    client_id: str = ""
    client_secret: str = ""
    return_url: str = ""
    scopes: list[str] = field(default_factory=lambda: list(DEFAULT_SCOPES))
    base_url: str = DEFAULT_BASE_URL


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig()


def normalize_base_url(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"

    normalized = f"{scheme}{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_BASE_URL_SCHEME
    if _WARNED_BASE_URL_SCHEME:
        return
    console.warn(f"base_url missing scheme, assuming {normalized}")
    _WARNED_BASE_URL_SCHEME = True


def parse_scopes(raw: str | list[str] | None) -> list[str]:
    if raw is None:
        return list(DEFAULT_SCOPES)
    items = raw.split(",") if isinstance(raw, str) else raw
    return [str(s).strip() for s in items if str(s).strip()]


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "client_id": cfg.client_id,
        "client_secret": cfg.client_secret,
        "return_url": cfg.return_url,
        "scopes": list(cfg.scopes),
        "base_url": cfg.base_url,
    }


def from_toml(data: dict[str, Any]) -> AppConfig:
    base_url = normalize_base_url(str(data.get("base_url") or ""), warn=True)
    scopes_raw = data.get("scopes")
    return AppConfig(
        client_id=str(data.get("client_id") or "").strip(),
        client_secret=str(data.get("client_secret") or "").strip(),
        return_url=str(data.get("return_url") or "").strip(),
        scopes=parse_scopes(scopes_raw if isinstance(scopes_raw, (str, list)) else None),
        base_url=base_url or DEFAULT_BASE_URL,
    )


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def resolve_client_secret(cfg: AppConfig) -> str:
    # the env value stays out of AppConfig and out of the saved file
    env_secret = os.getenv(ENV_CLIENT_SECRET, "").strip()
    return env_secret or cfg.client_secret


def resolve_access_token(option: str | None) -> str:
    value = (option or "").strip()
    if value:
        return value
    return os.getenv(ENV_ACCESS_TOKEN, "").strip()


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
