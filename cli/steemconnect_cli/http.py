from __future__ import annotations

from steemconnect import Client, Config, Token

from .config import AppConfig, normalize_base_url, resolve_client_secret


def make_config(cfg: AppConfig, *, base_url_override: str | None = None) -> Config:
    base_url = normalize_base_url(base_url_override or cfg.base_url, warn=True)
    return Config(
        client_id=cfg.client_id,
        client_secret=resolve_client_secret(cfg),
        return_url=cfg.return_url,
        scopes=tuple(cfg.scopes),
        base_url=base_url,
    )


def make_client(
        cfg: AppConfig,
        *,
        token: str | None = None,
        base_url_override: str | None = None,
) -> Client:
    client = Client(make_config(cfg, base_url_override=base_url_override))
    if token:
        client.set_token(Token(access_token=token))
    return client
