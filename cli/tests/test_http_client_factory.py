from __future__ import annotations

from steemconnect_cli import config
from steemconnect_cli.http import make_client


def test_make_client_builds_sdk_config() -> None:
    cfg = config.AppConfig(client_id="my.app", return_url="https://app.example/cb", scopes=["vote"])

    client = make_client(cfg, token="tok", base_url_override="sc.example/")

    sdk_cfg = client.get_config()
    assert sdk_cfg.client_id == "my.app"
    assert sdk_cfg.scopes == ("vote",)
    assert sdk_cfg.base_url == "https://sc.example"
    assert client.get_token().access_token == "tok"


def test_make_client_without_token_is_unauthenticated() -> None:
    client = make_client(config.AppConfig(client_id="my.app"))
    assert client.get_token() is None
    assert client.get_config().base_url == "https://steemconnect.com"


def test_make_client_takes_secret_from_env(monkeypatch) -> None:
    monkeypatch.setenv(config.ENV_CLIENT_SECRET, "env-secret")
    client = make_client(config.AppConfig(client_id="my.app", client_secret="stored"))
    assert client.get_config().client_secret == "env-secret"
