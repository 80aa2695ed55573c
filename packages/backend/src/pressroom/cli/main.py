"""Pressroom CLI — set up the database and talk to a running API.

Usage:
    pressroom init-db                             # Create tables (dev; use alembic in prod)
    pressroom seed --users 10 --articles 50       # Reset articles, add demo users
    pressroom register "Jane" jane@example.com    # Create an account, print its token
    pressroom login jane@example.com              # Fresh token for an account
    pressroom logout                              # Revoke the token in use
    pressroom articles                            # List articles (needs a token)
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import os
import sys
from typing import Optional

import click
import httpx

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8000/api"


def _api_url() -> str:
    return os.environ.get("PRESSROOM_API_URL", DEFAULT_API_URL).rstrip("/")


def _client(token: Optional[str] = None) -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the Pressroom API."""
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(base_url=_api_url(), headers=headers, timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Offloads to a thread when an event loop is already running (e.g.
    CliRunner inside an async test).
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _token_from_ctx(token: Optional[str]) -> str:
    """Resolve the bearer token from --token or PRESSROOM_TOKEN."""
    tok = token or os.environ.get("PRESSROOM_TOKEN")
    if not tok:
        click.secho(
            "Error: --token required (or set PRESSROOM_TOKEN env var)",
            fg="red",
            err=True,
        )
        sys.exit(1)
    return tok


def _pretty_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, default=str)


def _fail(resp: httpx.Response) -> None:
    """Print an API error envelope and exit non-zero."""
    try:
        body = resp.json()
    except ValueError:
        body = {"error": resp.text}
    click.secho(f"Error {resp.status_code}: {body.get('error', body)}", fg="red", err=True)
    for field, messages in body.get("errors", {}).items():
        for message in messages:
            click.secho(f"  {field}: {message}", fg="red", err=True)
    sys.exit(1)


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k, "—"))[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version="0.1.0", prog_name="pressroom")
def main():
    """Pressroom — articles API with token authentication."""


# ---------------------------------------------------------------------------
# Database commands (talk to the database directly)
# ---------------------------------------------------------------------------


@main.command("init-db")
def init_db():
    """Create all tables from the models."""
    from pressroom.db.engine import engine
    from pressroom.db.seed import create_schema

    async def _impl():
        await create_schema(engine)
        await engine.dispose()

    _run(_impl())
    click.secho("Tables created.", fg="green")


@main.command()
@click.option("--users", default=10, show_default=True, help="Demo users to create")
@click.option("--articles", default=50, show_default=True, help="Articles to generate")
@click.option("--password", default="password", show_default=True,
              help="Password shared by the demo users")
def seed(users: int, articles: int, password: str):
    """Reset the articles table and add demo users."""
    from pressroom.db.engine import async_session_factory, engine
    from pressroom.db.seed import seed as seed_db

    async def _impl():
        async with async_session_factory() as session:
            counts = await seed_db(session, users=users, articles=articles, password=password)
        await engine.dispose()
        return counts

    counts = _run(_impl())
    click.secho(
        f"Seeded {counts['articles']} articles, {counts['users']} new users.",
        fg="green",
    )


# ---------------------------------------------------------------------------
# API commands (talk to a running server)
# ---------------------------------------------------------------------------


@main.command()
@click.argument("name")
@click.argument("email")
@click.password_option()
def register(name: str, email: str, password: str):
    """Create an account and print its API token."""
    _run(_register_impl(name, email, password))


async def _register_impl(name: str, email: str, password: str):
    async with _client() as c:
        r = await c.post("/register", json={
            "name": name,
            "email": email,
            "password": password,
            "password_confirmation": password,
        })
    if r.status_code != 201:
        _fail(r)
    user = r.json()["data"]
    click.secho(f"Registered {user['email']} (id {user['id']})", fg="green")
    click.echo(user["api_token"])


@main.command()
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True)
def login(email: str, password: str):
    """Log in and print a fresh API token."""
    _run(_login_impl(email, password))


async def _login_impl(email: str, password: str):
    async with _client() as c:
        r = await c.post("/login", json={"email": email, "password": password})
    if r.status_code != 200:
        _fail(r)
    click.echo(r.json()["data"]["api_token"])


@main.command()
@click.option("--token", help="API token (or set PRESSROOM_TOKEN)")
def logout(token: Optional[str]):
    """Revoke the API token."""
    _run(_logout_impl(_token_from_ctx(token)))


async def _logout_impl(token: str):
    async with _client(token) as c:
        r = await c.post("/logout")
    if r.status_code != 200:
        _fail(r)
    click.secho(r.json()["data"], fg="green")


@main.command()
@click.option("--token", help="API token (or set PRESSROOM_TOKEN)")
@click.option("--json", "as_json", is_flag=True, help="Output raw JSON")
def articles(token: Optional[str], as_json: bool):
    """List articles."""
    _run(_articles_impl(_token_from_ctx(token), as_json))


async def _articles_impl(token: str, as_json: bool):
    async with _client(token) as c:
        r = await c.get("/articles")
    if r.status_code != 200:
        _fail(r)
    rows = r.json()
    if as_json:
        click.echo(_pretty_json(rows))
        return
    if not rows:
        click.echo("No articles.")
        return
    _print_table(rows, [("ID", "id", 6), ("TITLE", "title", 48), ("CREATED", "created_at", 20)])


if __name__ == "__main__":
    main()
