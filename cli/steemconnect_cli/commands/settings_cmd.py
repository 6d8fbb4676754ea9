from __future__ import annotations

import os

import typer

from .. import console
from ..config import (
    config_path,
    default_config,
    load_config,
    normalize_base_url,
    parse_scopes,
    resolve_client_secret,
    save_config,
)

app = typer.Typer(help="Manage local app settings (~/.config/steemconnect/config.toml).")

_KEYS = ("client_id", "return_url", "scopes", "base_url")


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        client_id: str = typer.Option(..., "--client-id", prompt="App (client) id", help="SteemConnect app account."),
        return_url: str = typer.Option(
            ...,
            "--return-url",
            prompt="Return URL",
            help="Redirect URI registered for the app.",
        ),
        scopes: str = typer.Option("login,vote,comment", "--scopes", help="Comma separated scopes."),
        base_url: str | None = typer.Option(None, "--base-url", help="SteemConnect base URL."),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    cfg = default_config()
    cfg.client_id = client_id.strip()
    cfg.return_url = return_url.strip()
    cfg.scopes = parse_scopes(scopes)
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url, warn=True)
    if not cfg.client_id:
        console.err("Client id cannot be empty.")
        raise typer.Exit(code=2)
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_config()
    secret_state = "(set)" if resolve_client_secret(cfg) else "(empty)"
    console.console.print(
        f"client_id={cfg.client_id} return_url={cfg.return_url} scopes={','.join(cfg.scopes)} "
        f"base_url={cfg.base_url} client_secret={secret_state}",
        markup=False,
    )


@app.command("get")
def get_setting(
        key: str = typer.Argument(..., help=f"Setting key ({', '.join(_KEYS)})."),
):
    cfg = load_config()
    k = key.strip().lower()
    if k not in _KEYS:
        console.err(f"Unknown setting: {key}")
        raise typer.Exit(code=2)
    value = getattr(cfg, k)
    console.console.print(",".join(value) if isinstance(value, list) else value, markup=False)


@app.command("set")
def set_setting(
        client_id: str | None = typer.Option(None, "--client-id", help="Set app (client) id."),
        client_secret: str | None = typer.Option(None, "--client-secret", help="Set app secret."),
        return_url: str | None = typer.Option(None, "--return-url", help="Set redirect URI."),
        scopes: str | None = typer.Option(None, "--scopes", help="Set comma separated scopes."),
        base_url: str | None = typer.Option(None, "--base-url", help="Set SteemConnect base URL."),
):
    cfg = load_config()
    if client_id is not None:
        cfg.client_id = client_id.strip()
    if client_secret is not None:
        cfg.client_secret = client_secret.strip()
    if return_url is not None:
        cfg.return_url = return_url.strip()
    if scopes is not None:
        cfg.scopes = parse_scopes(scopes)
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url, warn=True)
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
