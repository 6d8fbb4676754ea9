from __future__ import annotations

import typer

from steemconnect import SteemConnectError, Token

from .. import console
from ..config import load_config, resolve_access_token
from ..http import make_client

app = typer.Typer(help="OAuth2 authorization commands.")


@app.command("url", help="Print the URL a user opens to authorize the app.")
def authorization_url(
        state: str | None = typer.Option(None, "--state", help="Opaque value echoed back on redirect."),
        scopes: str | None = typer.Option(None, "--scopes", help="Comma separated scopes (default: configured)."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    try:
        client = make_client(cfg, base_url_override=base_url)
        scope_list = [s.strip() for s in scopes.split(",") if s.strip()] if scopes else None
        url = client.auth().get_authorization_url(state=state, scopes=scope_list)
    except SteemConnectError as e:
        console.err(f"Cannot build authorization URL: {e}")
        raise typer.Exit(code=2)
    console.console.print(url, markup=False, soft_wrap=True)


@app.command("exchange", help="Exchange an authorization code (or the full return URL) for a token.")
def exchange(
        code_or_url: str = typer.Argument(..., help="Authorization code or the return URL."),
        state: str | None = typer.Option(None, "--state", help="Expected state value."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    try:
        client = make_client(cfg, base_url_override=base_url)
        manager = client.auth()
        if "=" in code_or_url:
            token = manager.parse_return_url(code_or_url, expected_state=state)
        else:
            token = manager.exchange_code(code_or_url)
    except SteemConnectError as e:
        console.err(f"Token exchange failed: {e}")
        raise typer.Exit(code=2)
    console.print_json(token.to_dict())


@app.command("refresh", help="Get a new access token using a refresh token.")
def refresh(
        refresh_token: str = typer.Option(..., "--refresh-token", prompt=True, hide_input=True),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    try:
        client = make_client(cfg, base_url_override=base_url)
        token = client.auth().refresh(Token(access_token="", refresh_token=refresh_token))
    except SteemConnectError as e:
        console.err(f"Token refresh failed: {e}")
        raise typer.Exit(code=2)
    console.print_json(token.to_dict())


@app.command("revoke", help="Revoke an access token.")
def revoke(
        token: str | None = typer.Option(None, "--token", help="Access token (default: $SC2_ACCESS_TOKEN)."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    access_token = resolve_access_token(token)
    if not access_token:
        console.err("No access token given. Use --token or set SC2_ACCESS_TOKEN.")
        raise typer.Exit(code=2)
    cfg = load_config()
    try:
        client = make_client(cfg, token=access_token, base_url_override=base_url)
        client.auth().revoke()
    except SteemConnectError as e:
        console.err(f"Revoke failed: {e}")
        raise typer.Exit(code=2)
    console.ok("Token revoked.")


@app.command("me", help="Show the account the token belongs to.")
def me(
        token: str | None = typer.Option(None, "--token", help="Access token (default: $SC2_ACCESS_TOKEN)."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    access_token = resolve_access_token(token)
    if not access_token:
        console.err("No access token given. Use --token or set SC2_ACCESS_TOKEN.")
        raise typer.Exit(code=2)
    cfg = load_config()
    client = None
    try:
        client = make_client(cfg, token=access_token, base_url_override=base_url)
        resp = client.me()
    except SteemConnectError as e:
        console.err(f"Request failed: {e}")
        raise typer.Exit(code=2)
    finally:
        if client is not None:
            client.close()
    console.print_json(resp.data)
