"""CLI tests — API commands against a stubbed HTTP transport.

The commands build their client through _client(); tests swap it for
one backed by httpx.MockTransport so no server is needed.
"""

import json

import httpx
import pytest
from click.testing import CliRunner

from pressroom.cli import main as cli


@pytest.fixture()
def api(monkeypatch):
    """Route CLI requests to a handler; records every request."""
    state = {"handler": None, "requests": []}

    def _client(token=None):
        def handle(request: httpx.Request) -> httpx.Response:
            state["requests"].append(request)
            return state["handler"](request)

        headers = {"Authorization": f"Bearer {token}"} if token else {}
        return httpx.AsyncClient(
            transport=httpx.MockTransport(handle),
            base_url="http://test/api",
            headers=headers,
        )

    monkeypatch.setattr(cli, "_client", _client)
    monkeypatch.delenv("PRESSROOM_TOKEN", raising=False)
    return state


def test_register_prints_token(api):
    api["handler"] = lambda req: httpx.Response(
        201,
        json={"data": {"id": 1, "name": "Jane", "email": "jane@example.com",
                       "api_token": "tok123"}},
    )
    result = CliRunner().invoke(
        cli.main,
        ["register", "Jane", "jane@example.com", "--password", "correct-horse"],
    )
    assert result.exit_code == 0, result.output
    assert "tok123" in result.output

    sent = json.loads(api["requests"][0].content)
    assert sent["password_confirmation"] == sent["password"] == "correct-horse"


def test_register_shows_validation_errors(api):
    api["handler"] = lambda req: httpx.Response(
        422,
        json={"error": "The given data was invalid.",
              "errors": {"email": ["The email has already been taken."]}},
    )
    result = CliRunner().invoke(
        cli.main,
        ["register", "Jane", "jane@example.com", "--password", "correct-horse"],
    )
    assert result.exit_code == 1
    assert "The email has already been taken." in result.output


def test_login_prints_token(api):
    api["handler"] = lambda req: httpx.Response(
        200, json={"data": {"id": 1, "api_token": "fresh"}}
    )
    result = CliRunner().invoke(
        cli.main, ["login", "jane@example.com", "--password", "correct-horse"]
    )
    assert result.exit_code == 0
    assert result.output.strip() == "fresh"


def test_login_failure_exits_nonzero(api):
    api["handler"] = lambda req: httpx.Response(
        401, json={"error": "These credentials do not match our records."}
    )
    result = CliRunner().invoke(
        cli.main, ["login", "jane@example.com", "--password", "nope"]
    )
    assert result.exit_code == 1
    assert "These credentials do not match our records." in result.output


def test_articles_requires_token(api):
    result = CliRunner().invoke(cli.main, ["articles"])
    assert result.exit_code == 1
    assert "--token required" in result.output
    assert api["requests"] == []


def test_articles_lists_table(api, monkeypatch):
    monkeypatch.setenv("PRESSROOM_TOKEN", "tok")
    api["handler"] = lambda req: httpx.Response(
        200, json=[{"id": 7, "title": "Hello", "body": "x",
                    "created_at": "2026-10-19T09:00:00"}]
    )
    result = CliRunner().invoke(cli.main, ["articles"])
    assert result.exit_code == 0
    assert "Hello" in result.output
    assert api["requests"][0].headers["Authorization"] == "Bearer tok"


def test_logout(api):
    api["handler"] = lambda req: httpx.Response(200, json={"data": "User logged out."})
    result = CliRunner().invoke(cli.main, ["logout", "--token", "tok"])
    assert result.exit_code == 0
    assert "User logged out." in result.output
    assert api["requests"][0].url.path == "/api/logout"
