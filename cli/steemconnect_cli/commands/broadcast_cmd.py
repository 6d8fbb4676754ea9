from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from steemconnect import SteemConnectError
from steemconnect import operations as ops

from .. import console
from ..config import load_config, resolve_access_token
from ..http import make_client

app = typer.Typer(help="Broadcast operations to the Steem blockchain.")

TokenOption = typer.Option(None, "--token", help="Access token (default: $SC2_ACCESS_TOKEN).")
BaseUrlOption = typer.Option(None, "--base-url", help="Override base URL.")


def _broadcast(operations: list[Any], *, token: str | None, base_url: str | None) -> None:
    access_token = resolve_access_token(token)
    if not access_token:
        console.err("No access token given. Use --token or set SC2_ACCESS_TOKEN.")
        raise typer.Exit(code=2)
    cfg = load_config()
    client = None
    try:
        client = make_client(cfg, token=access_token, base_url_override=base_url)
        resp = client.broadcast(*operations)
    except SteemConnectError as e:
        console.err(f"Broadcast failed: {e}")
        raise typer.Exit(code=2)
    finally:
        if client is not None:
            client.close()

    if resp.transaction_id:
        console.ok(f"Broadcast accepted: trx {resp.transaction_id} (block {resp.block_num})")
    else:
        console.print_json(resp.data)


@app.command("vote")
def vote(
        voter: str = typer.Option(..., "--voter"),
        author: str = typer.Option(..., "--author"),
        permlink: str = typer.Option(..., "--permlink"),
        weight: int = typer.Option(10000, "--weight", help="Vote weight, -10000..10000 (100% = 10000)."),
        token: str | None = TokenOption,
        base_url: str | None = BaseUrlOption,
):
    try:
        op = ops.vote(voter, author, permlink, weight)
    except ValueError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    _broadcast([op], token=token, base_url=base_url)


@app.command("custom-json")
def custom_json(
        account: str = typer.Option(..., "--account", help="Posting authority."),
        id_: str = typer.Option(..., "--id", help="custom_json id."),
        payload: str = typer.Option(..., "--json", help="JSON payload."),
        token: str | None = TokenOption,
        base_url: str | None = BaseUrlOption,
):
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        console.err(f"--json is not valid JSON: {e}")
        raise typer.Exit(code=2)
    _broadcast([ops.custom_json(id_, data, required_posting_auths=[account])], token=token, base_url=base_url)


@app.command("follow")
def follow(
        follower: str = typer.Option(..., "--follower"),
        following: str = typer.Option(..., "--following"),
        token: str | None = TokenOption,
        base_url: str | None = BaseUrlOption,
):
    _broadcast([ops.follow(follower, following)], token=token, base_url=base_url)


@app.command("unfollow")
def unfollow(
        follower: str = typer.Option(..., "--follower"),
        following: str = typer.Option(..., "--following"),
        token: str | None = TokenOption,
        base_url: str | None = BaseUrlOption,
):
    _broadcast([ops.unfollow(follower, following)], token=token, base_url=base_url)


@app.command("reblog")
def reblog(
        account: str = typer.Option(..., "--account"),
        author: str = typer.Option(..., "--author"),
        permlink: str = typer.Option(..., "--permlink"),
        token: str | None = TokenOption,
        base_url: str | None = BaseUrlOption,
):
    _broadcast([ops.reblog(account, author, permlink)], token=token, base_url=base_url)


@app.command("raw", help="Broadcast [name, params] pairs read from a JSON file.")
def raw(
        path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
        token: str | None = TokenOption,
        base_url: str | None = BaseUrlOption,
):
    try:
        items = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.err(f"{path} is not valid JSON: {e}")
        raise typer.Exit(code=2)
    if not isinstance(items, list) or not items:
        console.err("Expected a non-empty JSON list of [name, params] pairs.")
        raise typer.Exit(code=2)
    operations = []
    for item in items:
        if not (isinstance(item, list) and len(item) == 2 and isinstance(item[0], str) and isinstance(item[1], dict)):
            console.err(f"Each item must be a [name, params] pair, got: {json.dumps(item)[:200]}")
            raise typer.Exit(code=2)
        operations.append(ops.Operation(item[0], item[1]))
    _broadcast(operations, token=token, base_url=base_url)
