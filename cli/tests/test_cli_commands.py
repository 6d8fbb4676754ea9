from __future__ import annotations

import json

import httpx
from typer.testing import CliRunner

from steemconnect import Client
from steemconnect_cli import config, main
from steemconnect_cli.commands import broadcast_cmd
from steemconnect_cli.http import make_config

runner = CliRunner()


def _use_tmp_config(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda _: str(tmp_path))
    monkeypatch.delenv(config.ENV_CLIENT_SECRET, raising=False)
    monkeypatch.delenv(config.ENV_ACCESS_TOKEN, raising=False)


def test_help_lists_groups() -> None:
    result = runner.invoke(main._build_app(), ["--help"])
    assert result.exit_code == 0
    for group in ("settings", "auth", "broadcast"):
        assert group in result.output


def test_settings_set_and_get(tmp_path, monkeypatch) -> None:
    _use_tmp_config(tmp_path, monkeypatch)
    app = main._build_app()
    result = runner.invoke(app, ["settings", "set", "--client-id", "my.app", "--scopes", "login,vote"])
    assert result.exit_code == 0

    result = runner.invoke(app, ["settings", "get", "scopes"])
    assert result.exit_code == 0
    assert result.output.strip() == "login,vote"

    result = runner.invoke(app, ["settings", "get", "nope"])
    assert result.exit_code == 2


def test_auth_url_prints_authorization_url(tmp_path, monkeypatch) -> None:
    _use_tmp_config(tmp_path, monkeypatch)
    config.save_config(config.AppConfig(client_id="my.app", return_url="https://app.example/cb"))
    result = runner.invoke(main._build_app(), ["auth", "url", "--state", "xyz"])
    assert result.exit_code == 0
    assert "https://steemconnect.com/oauth2/authorize?client_id=my.app" in result.output
    assert "state=xyz" in result.output


def test_auth_url_without_client_id_fails(tmp_path, monkeypatch) -> None:
    _use_tmp_config(tmp_path, monkeypatch)
    result = runner.invoke(main._build_app(), ["auth", "url"])
    assert result.exit_code == 2
    assert "client_id is required" in result.output


def test_broadcast_vote_requires_token(tmp_path, monkeypatch) -> None:
    _use_tmp_config(tmp_path, monkeypatch)
    result = runner.invoke(
        main._build_app(),
        ["broadcast", "vote", "--voter", "alice", "--author", "bob", "--permlink", "post"],
    )
    assert result.exit_code == 2
    assert "No access token" in result.output


def test_broadcast_vote_sends_operation(tmp_path, monkeypatch) -> None:
    _use_tmp_config(tmp_path, monkeypatch)
    config.save_config(config.AppConfig(client_id="my.app"))
    sent: list[dict] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        sent.append(json.loads(request.content))
        return httpx.Response(200, json={"result": {"id": "abc123", "block_num": 9}})

    def _make_client(cfg, *, token=None, base_url_override=None):
        client = Client(make_config(cfg, base_url_override=base_url_override), transport=httpx.MockTransport(_handler))
        return client

    monkeypatch.setattr(broadcast_cmd, "make_client", _make_client)
    monkeypatch.setenv(config.ENV_ACCESS_TOKEN, "tok")
    result = runner.invoke(
        main._build_app(),
        ["broadcast", "vote", "--voter", "alice", "--author", "bob", "--permlink", "post", "--weight", "5000"],
    )
    assert result.exit_code == 0, result.output
    assert "abc123" in result.output
    assert sent == [{"operations": [["vote", {"voter": "alice", "author": "bob", "permlink": "post", "weight": 5000}]]}]


def test_broadcast_raw_rejects_bad_items(tmp_path, monkeypatch) -> None:
    _use_tmp_config(tmp_path, monkeypatch)
    ops_file = tmp_path / "ops.json"
    ops_file.write_text(json.dumps([["vote"]]), encoding="utf-8")
    result = runner.invoke(main._build_app(), ["broadcast", "raw", str(ops_file), "--token", "tok"])
    assert result.exit_code == 2
    assert "[name, params]" in result.output


def test_settings_set_does_not_persist_env_secret(tmp_path, monkeypatch) -> None:
    _use_tmp_config(tmp_path, monkeypatch)
    config.save_config(config.AppConfig(client_id="old.app", client_secret="stored"))
    monkeypatch.setenv(config.ENV_CLIENT_SECRET, "env-only-secret")

    result = runner.invoke(main._build_app(), ["settings", "set", "--client-id", "my.app"])

    assert result.exit_code == 0, result.output
    contents = tmp_path.joinpath("config.toml").read_text(encoding="utf-8")
    assert "env-only-secret" not in contents
    assert 'client_secret = "stored"' in contents
    assert 'client_id = "my.app"' in contents
