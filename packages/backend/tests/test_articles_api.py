"""Articles API tests — CRUD behind the bearer-token gate."""

import pytest
from sqlalchemy import func, select

from pressroom.db.models import Article

API = "/api"


async def _create(client, headers, title="Lede", body="Body text."):
    r = await client.post(
        f"{API}/articles", json={"title": title, "body": body}, headers=headers
    )
    assert r.status_code == 201, r.text
    return r.json()


@pytest.mark.asyncio
async def test_create_article(client, auth_headers):
    r = await client.post(
        f"{API}/articles",
        json={"title": "Hello", "body": "First post."},
        headers=auth_headers,
    )
    assert r.status_code == 201
    article = r.json()
    assert article["title"] == "Hello"
    assert article["body"] == "First post."
    assert isinstance(article["id"], int)


@pytest.mark.asyncio
async def test_list_articles(client, auth_headers):
    await _create(client, auth_headers, title="One")
    await _create(client, auth_headers, title="Two")

    r = await client.get(f"{API}/articles", headers=auth_headers)
    assert r.status_code == 200
    assert [a["title"] for a in r.json()] == ["One", "Two"]


@pytest.mark.asyncio
async def test_get_article(client, auth_headers):
    created = await _create(client, auth_headers)
    r = await client.get(f"{API}/articles/{created['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["id"] == created["id"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "article_id", ["999", "abc", "-1", "0", "²", "99999999999999999999999"]
)
async def test_get_missing_article(client, auth_headers, article_id):
    r = await client.get(f"{API}/articles/{article_id}", headers=auth_headers)
    assert r.status_code == 404
    assert r.json() == {"error": "Resource not found"}


@pytest.mark.asyncio
async def test_update_article_partial(client, auth_headers):
    created = await _create(client, auth_headers, title="Old", body="Kept.")
    r = await client.put(
        f"{API}/articles/{created['id']}",
        json={"title": "New"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["title"] == "New"
    assert r.json()["body"] == "Kept."


@pytest.mark.asyncio
async def test_update_missing_article(client, auth_headers):
    r = await client.put(
        f"{API}/articles/999", json={"title": "New"}, headers=auth_headers
    )
    assert r.status_code == 404
    assert r.json() == {"error": "Resource not found"}


@pytest.mark.asyncio
async def test_delete_article(client, auth_headers, db_session):
    created = await _create(client, auth_headers)

    r = await client.delete(f"{API}/articles/{created['id']}", headers=auth_headers)
    assert r.status_code == 204
    assert r.content == b""

    r = await client.get(f"{API}/articles/{created['id']}", headers=auth_headers)
    assert r.status_code == 404

    count = await db_session.scalar(select(func.count()).select_from(Article))
    assert count == 0


@pytest.mark.asyncio
async def test_create_ignores_unlisted_fields(client, auth_headers):
    r = await client.post(
        f"{API}/articles",
        json={
            "title": "Hello",
            "body": "Text.",
            "id": 4242,
            "created_at": "1999-01-01T00:00:00",
        },
        headers=auth_headers,
    )
    assert r.status_code == 201
    assert r.json()["id"] != 4242
    assert not r.json()["created_at"].startswith("1999")


@pytest.mark.asyncio
async def test_update_ignores_unlisted_fields(client, auth_headers):
    created = await _create(client, auth_headers)
    r = await client.put(
        f"{API}/articles/{created['id']}",
        json={"id": 4242},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["id"] == created["id"]
    assert r.json()["title"] == created["title"]


@pytest.mark.asyncio
async def test_create_article_validation(client, auth_headers):
    r = await client.post(f"{API}/articles", json={"title": ""}, headers=auth_headers)
    assert r.status_code == 422
    assert set(r.json()["errors"]) == {"title", "body"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/articles"),
        ("GET", "/articles/1"),
        ("POST", "/articles"),
        ("PUT", "/articles/1"),
        ("DELETE", "/articles/1"),
    ],
)
async def test_articles_require_token(client, method, path):
    r = await client.request(method, f"{API}{path}", json={"title": "t", "body": "b"})
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthenticated."}


@pytest.mark.asyncio
async def test_articles_reject_revoked_token(client, auth_headers):
    await client.post(f"{API}/logout", headers=auth_headers)
    r = await client.get(f"{API}/articles", headers=auth_headers)
    assert r.status_code == 401
